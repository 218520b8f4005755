from .tenant import Tenant
from .user import User
from .site import Site
from .page import Page
from .media import Media
from .audit_log import AuditLog

__all__ = ["Tenant", "User", "Site", "Page", "Media", "AuditLog"]
