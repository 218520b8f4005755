import enum


class Role(str, enum.Enum):
    """User roles, declared from most to least privileged."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def at_least(self, other: "Role") -> bool:
        return self.rank >= other.rank


_RANKS = {role: rank for rank, role in enumerate(reversed(list(Role)))}


class Action(str, enum.Enum):
    SITE_READ = "site.read"
    SITE_CREATE = "site.create"
    SITE_UPDATE = "site.update"
    SITE_PUBLISH = "site.publish"
    SITE_DELETE = "site.delete"

    PAGE_READ = "page.read"
    PAGE_CREATE = "page.create"
    PAGE_UPDATE = "page.update"
    PAGE_PUBLISH = "page.publish"
    PAGE_DELETE = "page.delete"

    MEDIA_READ = "media.read"
    MEDIA_CREATE = "media.create"
    MEDIA_UPDATE = "media.update"
    MEDIA_DELETE = "media.delete"

    USER_LIST = "user.list"
    AUDIT_READ = "audit.read"


class DenyReason(str, enum.Enum):
    NOT_AUTHENTICATED = "not_authenticated"
    ROLE_INSUFFICIENT = "insufficient_role"
    NOT_OWNER = "not_owner"
    OUT_OF_SCOPE = "out_of_scope"
