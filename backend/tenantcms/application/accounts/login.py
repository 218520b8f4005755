from flask import current_app
from sqlalchemy import select

from tenantcms.domain.errors import AuthenticationError
from tenantcms.models import User

INVALID_CREDENTIALS = "Email or password is incorrect"


def authenticate_user(session, *, email: str, password: str) -> User:
    """
    Resolve an active user by credentials.

    Unknown email, wrong password and inactive account fail identically.
    """
    user = session.execute(
        select(User).where(User.email == email, User.is_active.is_(True))
    ).scalar_one_or_none()

    if user is None or not user.check_password(password):
        current_app.logger.info("Failed login attempt")
        raise AuthenticationError(INVALID_CREDENTIALS)

    return user
