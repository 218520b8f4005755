from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.uniqueness import MEDIA_FILENAME, guard, reserve
from tenantcms.models import Media, Site
from tenantcms.schemas.media import MediaCreate
from tenantcms.utils.audit import log_action
from tenantcms.utils.transaction import transactional


def create_media(session, *, identity: Identity, payload: MediaCreate) -> Media:
    """
    Record metadata for a file already stored elsewhere.

    The filename must be unused within the target site.
    """
    authorize(identity, Action.MEDIA_CREATE)

    with transactional(session):
        site = scoped_get(session, identity, Site, payload.site_id)
        reservation = reserve(session, MEDIA_FILENAME, payload.filename, parent_id=site.id)

        with guard(session, reservation):
            media = Media()
            media.site_id = site.id
            media.filename = payload.filename
            media.original_name = payload.original_name
            media.mime_type = payload.mime_type
            media.size = payload.size
            media.url = payload.url
            media.alt = payload.alt
            session.add(media)

        log_action(
            session,
            identity=identity,
            action="media.create",
            entity_type="media",
            entity_id=media.id,
            payload={"site_id": site.id, "filename": media.filename, "size": media.size},
        )

    return media
