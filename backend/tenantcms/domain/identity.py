from dataclasses import dataclass

from .roles import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as resolved from a verified access token."""

    user_id: str
    email: str
    role: Role
    tenant_id: str

    @classmethod
    def of(cls, user) -> "Identity":
        return cls(
            user_id=user.id,
            email=user.email,
            role=Role(user.role),
            tenant_id=user.tenant_id,
        )
