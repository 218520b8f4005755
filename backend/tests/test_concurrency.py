"""
Home-page claims racing on a database shared between connections.

Each worker pushes its own app context, so it gets its own session and
connection. SQLite runs from a file; Postgres runs when
``TENANTCMS_TEST_POSTGRES_URI`` points at a disposable database.
"""
import os
import threading

import pytest
from sqlalchemy import func, select

from tenantcms import create_app
from tenantcms.application.accounts.register import register_tenant
from tenantcms.application.cms.create_page import create_page
from tenantcms.application.cms.update_page import update_page
from tenantcms.application.sites.create_site import create_site
from tenantcms.domain.errors import ConflictError
from tenantcms.domain.identity import Identity
from tenantcms.extensions import db
from tenantcms.models import Page
from tenantcms.schemas.auth import RegisterRequest
from tenantcms.schemas.page import PageCreate, PageUpdate
from tenantcms.schemas.site import SiteCreate

from .helpers import PASSWORD

WORKERS = 2


def _database(backend, tmp_path):
    if backend == "sqlite":
        return {
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'race.db'}",
            "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"check_same_thread": False}},
        }
    uri = os.getenv("TENANTCMS_TEST_POSTGRES_URI")
    if not uri:
        pytest.skip("TENANTCMS_TEST_POSTGRES_URI is not set")
    return {"SQLALCHEMY_DATABASE_URI": uri}


@pytest.fixture(params=["sqlite", "postgresql"])
def shared_app(request, tmp_path):
    app = create_app("testing", **_database(request.param, tmp_path))
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def blog(shared_app):
    with shared_app.app_context():
        _, user = register_tenant(db.session, payload=RegisterRequest(
            email="a@acme.com",
            password=PASSWORD,
            first_name="Ada",
            last_name="Admin",
            tenant_name="Acme",
            tenant_domain="acme.com",
        ))
        identity = Identity.of(user)
        site = create_site(db.session, identity=identity, payload=SiteCreate(name="Blog"))
        site_id = site.id
        db.session.remove()
    return identity, site_id


def race(app, calls):
    """Run every call at once, each in its own app context; returns the errors raised."""
    barrier = threading.Barrier(len(calls))
    errors = []

    def worker(call):
        with app.app_context():
            barrier.wait()
            try:
                call(db.session)
            except Exception as exc:
                errors.append(exc)
            finally:
                db.session.remove()

    threads = [threading.Thread(target=worker, args=(call,)) for call in calls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return errors


def home_pages(app, site_id):
    with app.app_context():
        count = db.session.execute(
            select(func.count(Page.id)).where(Page.site_id == site_id, Page.is_home_page.is_(True))
        ).scalar_one()
        db.session.remove()
    return count


def test_concurrent_home_page_creation_leaves_one_home_page(shared_app, blog):
    identity, site_id = blog

    def creator(slug):
        def call(session):
            create_page(session, identity=identity, payload=PageCreate(
                site_id=site_id, title=slug.title(), slug=slug, is_home_page=True,
            ))
        return call

    errors = race(shared_app, [creator(f"home-{n}") for n in range(WORKERS)])

    assert all(isinstance(exc, ConflictError) for exc in errors), errors
    assert len(errors) < WORKERS
    assert home_pages(shared_app, site_id) == 1


def test_concurrent_home_page_updates_leave_one_home_page(shared_app, blog):
    identity, site_id = blog
    with shared_app.app_context():
        create_page(db.session, identity=identity, payload=PageCreate(
            site_id=site_id, title="Home", slug="home", is_home_page=True,
        ))
        page_ids = [
            create_page(db.session, identity=identity, payload=PageCreate(
                site_id=site_id, title=f"Page {n}", slug=f"page-{n}",
            )).id
            for n in range(WORKERS)
        ]
        db.session.remove()

    def promoter(page_id):
        def call(session):
            update_page(session, identity=identity, page_id=page_id, payload=PageUpdate(is_home_page=True))
        return call

    errors = race(shared_app, [promoter(page_id) for page_id in page_ids])

    assert all(isinstance(exc, ConflictError) for exc in errors), errors
    assert len(errors) < WORKERS
    assert home_pages(shared_app, site_id) == 1
