"""
Session credentials.

Access tokens carry the caller's identity (user, email, role, tenant) and last
24h; refresh tokens carry only the user id and a ``refresh`` type marker and
last 7d. Both are signed, issuer- and audience-bound JWTs produced by
flask-jwt-extended.

Request verification goes through ``jwt_required``; the loaders registered
here check the claim schema, resolve the user with one lookup and render every
failure as an ``AuthenticationError`` body.
"""
from typing import Literal, Optional

from flask import current_app, jsonify
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, PyJWTError
from pydantic import BaseModel, EmailStr, ValidationError as SchemaError

from tenantcms.domain.errors import AuthenticationError
from tenantcms.domain.identity import Identity
from tenantcms.domain.roles import Role
from tenantcms.extensions import db, jwt
from tenantcms.models import User

INVALID_TOKEN = "Invalid token"
EXPIRED_TOKEN = "Token has expired"
UNKNOWN_USER = "User not found or inactive"


class AccessClaims(BaseModel):
    sub: str
    email: EmailStr
    role: Role
    tenant_id: str
    type: Literal["access"]


class RefreshClaims(BaseModel):
    sub: str
    type: Literal["refresh"]


CLAIM_SCHEMAS = {
    "access": AccessClaims,
    "refresh": RefreshClaims,
}


def issue_tokens(user: User) -> dict:
    access_token = create_access_token(
        identity=user.id,
        additional_claims={
            "email": user.email,
            "role": Role(user.role).value,
            "tenant_id": user.tenant_id,
        },
    )
    refresh_token = create_refresh_token(identity=user.id)

    expires = current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    return {
        "accessToken": access_token,
        "refreshToken": refresh_token,
        "expiresIn": int(expires.total_seconds()),
    }


def claims_are_valid(claims: dict) -> bool:
    schema = CLAIM_SCHEMAS.get(claims.get("type"))
    if schema is None:
        return False
    try:
        schema.model_validate(claims)
    except SchemaError:
        current_app.logger.info("Rejected %s token with malformed claims", claims.get("type"))
        return False
    return True


def load_active_user(session, user_id: Optional[str]) -> Optional[User]:
    user = session.get(User, user_id) if user_id else None
    if user is None or not user.is_active:
        return None
    return user


def verify_token(token: str, *, session, expected_type: str = "access") -> Identity:
    """
    Verify ``token`` and resolve the identity it names.

    Used where the token travels outside the Authorization header (the refresh
    body). Fails with ``AuthenticationError`` on a bad signature, expiry, wrong
    issuer/audience, wrong token type, malformed claims, or when the user no
    longer exists or is inactive. Performs one user lookup.
    """
    try:
        claims = decode_token(token)
    except ExpiredSignatureError:
        raise AuthenticationError(EXPIRED_TOKEN) from None
    except (PyJWTError, JWTExtendedException):
        raise AuthenticationError(INVALID_TOKEN) from None

    if claims.get("type") != expected_type or not claims_are_valid(claims):
        raise AuthenticationError(INVALID_TOKEN)

    user = load_active_user(session, claims["sub"])
    if user is None:
        raise AuthenticationError(UNKNOWN_USER)

    return Identity.of(user)


# -------------------------------------------------
# flask-jwt-extended callbacks
# -------------------------------------------------

def _reject(message: str):
    error = AuthenticationError(message)
    return jsonify(error.to_dict()), error.status_code


@jwt.token_verification_loader
def _verify_claims(jwt_header, jwt_data):
    return claims_are_valid(jwt_data)


@jwt.user_lookup_loader
def _lookup_user(jwt_header, jwt_data):
    return load_active_user(db.session, jwt_data.get("sub"))


@jwt.unauthorized_loader
def _missing_token(reason):
    return _reject(AuthenticationError.default_message)


@jwt.invalid_token_loader
def _invalid_token(reason):
    return _reject(INVALID_TOKEN)


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_data):
    return _reject(EXPIRED_TOKEN)


@jwt.token_verification_failed_loader
def _claims_rejected(jwt_header, jwt_data):
    return _reject(INVALID_TOKEN)


@jwt.user_lookup_error_loader
def _unknown_user(jwt_header, jwt_data):
    return _reject(UNKNOWN_USER)
