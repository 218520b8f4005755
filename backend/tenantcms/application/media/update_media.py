from typing import Optional

from tenantcms.domain.errors import ValidationError
from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize
from tenantcms.domain.roles import Action
from tenantcms.domain.scope import scoped_get
from tenantcms.domain.uniqueness import MEDIA_FILENAME, guard, reserve
from tenantcms.models import Media
from tenantcms.schemas.media import MediaUpdate
from tenantcms.utils.audit import log_action
from tenantcms.utils.optimistic_lock import enforce_optimistic_lock
from tenantcms.utils.transaction import transactional


def update_media(
    session,
    *,
    identity: Identity,
    media_id: str,
    payload: MediaUpdate,
    if_unmodified_since: Optional[str] = None,
) -> Media:
    authorize(identity, Action.MEDIA_UPDATE)

    changes = payload.changes()
    if not changes:
        raise ValidationError("No valid fields provided for update")

    with transactional(session):
        media = scoped_get(session, identity, Media, media_id, for_update=True)
        authorize(identity, Action.MEDIA_UPDATE, media, resource_name="Media")
        enforce_optimistic_lock(media, if_unmodified_since)

        reservations = []
        new_filename = changes.get("filename")
        if new_filename is not None and new_filename != media.filename:
            reservations.append(
                reserve(session, MEDIA_FILENAME, new_filename, parent_id=media.site_id, exclude_id=media.id)
            )

        changed_fields: list[str] = []
        with guard(session, *reservations):
            for field, value in changes.items():
                if getattr(media, field) != value:
                    setattr(media, field, value)
                    changed_fields.append(field)

        if changed_fields:
            log_action(
                session,
                identity=identity,
                action="media.update",
                entity_type="media",
                entity_id=media.id,
                payload={"fields": sorted(changed_fields)},
            )

    return media
