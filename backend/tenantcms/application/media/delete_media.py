from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.models import Media
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def delete_media(session, *, identity: Identity, media_id: str) -> None:
    """Remove the media record; the stored bytes are not touched."""
    authorize(identity, Action.MEDIA_DELETE)

    with transactional(session):
        media = scoped_get(session, identity, Media, media_id, for_update=True)
        authorize(identity, Action.MEDIA_DELETE, media, resource_name="Media")

        payload = {"site_id": media.site_id, "filename": media.filename}
        session.delete(media)

        log_action(
            session,
            identity=identity,
            action="media.delete",
            entity_type="media",
            entity_id=media_id,
            payload=payload,
        )
