from functools import wraps
from flask_jwt_extended import get_current_user
from tenantcms.domain.identity import Identity
from tenantcms.domain.policy import authorize


def current_identity() -> Identity:
    """The caller resolved by ``jwt_required``; only valid inside a protected route."""
    return Identity.of(get_current_user())


def capability_required(action):
    """Role gate for resource-independent checks; apply below ``jwt_required()``."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            authorize(current_identity(), action)
            return fn(*args, **kwargs)
        return wrapper
    return decorator
