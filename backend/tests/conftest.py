import pytest

from tenantcms import create_app
from tenantcms.auth.tokens import issue_tokens
from tenantcms.domain.roles import Role
from tenantcms.extensions import db
from tenantcms.models import User

from .helpers import PASSWORD, bearer, tenant_account


@pytest.fixture
def app():
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def acme(client):
    return tenant_account(client, email="a@acme.com", domain="acme.com", tenant_name="Acme")


@pytest.fixture
def globex(client):
    return tenant_account(client, email="hank@globex.com", domain="globex.com", tenant_name="Globex")


@pytest.fixture
def make_user(session):
    """Add a user to an existing tenant and return it with auth headers."""
    def _make(tenant_id, role, email, *, is_active=True):
        user = User()
        user.tenant_id = tenant_id
        user.email = email
        user.first_name = role.value.title()
        user.last_name = "User"
        user.role = Role(role)
        user.is_active = is_active
        user.set_password(PASSWORD)
        session.add(user)
        session.commit()
        return user, bearer(issue_tokens(user)["accessToken"])
    return _make
