from tenantcms.domain.identity import Identity
from tenantcms.domain.roles import Role
from tenantcms.domain.scope import scoped_select
from tenantcms.models import Page, User

from .helpers import API, create_media, create_page, create_site


def seed(client, account, name):
    site = create_site(client, account["headers"], name=name)
    page = create_page(client, account["headers"], site["id"], "home").get_json()["page"]
    media = create_media(client, account["headers"], site["id"], "logo.png").get_json()["media"]
    return site, page, media


def test_lists_only_show_own_tenant(client, acme, globex):
    acme_site, acme_page, acme_media = seed(client, acme, "Acme Blog")
    globex_site, _, _ = seed(client, globex, "Globex Blog")

    sites = client.get(f"{API}/sites", headers=acme["headers"]).get_json()["sites"]
    pages = client.get(f"{API}/pages", headers=acme["headers"]).get_json()["pages"]
    media = client.get(f"{API}/media", headers=acme["headers"]).get_json()["media"]
    users = client.get(f"{API}/users", headers=acme["headers"]).get_json()["users"]

    assert [site["id"] for site in sites] == [acme_site["id"]]
    assert [page["id"] for page in pages] == [acme_page["id"]]
    assert [item["id"] for item in media] == [acme_media["id"]]
    assert [user["email"] for user in users] == ["a@acme.com"]

    filtered = client.get(f"{API}/pages?siteId={globex_site['id']}", headers=acme["headers"]).get_json()
    assert filtered["total"] == 0


def test_foreign_ids_are_not_found(client, acme, globex):
    site, page, media = seed(client, globex, "Globex Blog")
    headers = acme["headers"]

    responses = [
        client.get(f"{API}/sites/{site['id']}", headers=headers),
        client.put(f"{API}/sites/{site['id']}", json={"name": "Mine"}, headers=headers),
        client.patch(f"{API}/sites/{site['id']}/publish", json={"isPublished": True}, headers=headers),
        client.delete(f"{API}/sites/{site['id']}", headers=headers),
        client.get(f"{API}/pages/{page['id']}", headers=headers),
        client.put(f"{API}/pages/{page['id']}", json={"title": "Mine"}, headers=headers),
        client.patch(f"{API}/pages/{page['id']}/publish", json={"status": "PUBLISHED"}, headers=headers),
        client.delete(f"{API}/pages/{page['id']}", headers=headers),
        client.get(f"{API}/media/{media['id']}", headers=headers),
        client.put(f"{API}/media/{media['id']}", json={"alt": "Mine"}, headers=headers),
        client.delete(f"{API}/media/{media['id']}", headers=headers),
    ]

    for resp in responses:
        assert resp.status_code == 404
        assert resp.get_json()["error"] == "not_found"

    still_there = client.get(f"{API}/pages/{page['id']}", headers=globex["headers"])
    assert still_there.get_json()["page"]["title"] == "Home"


def test_cannot_create_into_foreign_site(client, acme, globex):
    site = create_site(client, globex["headers"], name="Globex Blog")

    page = create_page(client, acme["headers"], site["id"], "sneaky")
    media = create_media(client, acme["headers"], site["id"], "sneaky.png")

    assert page.status_code == 404
    assert media.status_code == 404


def test_scoped_select_conjoins_tenant_predicate(session, acme, globex, client):
    seed(client, acme, "Acme Blog")
    seed(client, globex, "Globex Blog")
    identity = Identity(user_id=acme["user_id"], email="a@acme.com", role=Role.ADMIN, tenant_id=acme["tenant_id"])

    pages = session.execute(scoped_select(identity, Page)).scalars().all()
    users = session.execute(scoped_select(identity, User)).scalars().all()

    assert len(pages) == 1
    assert pages[0].site.tenant_id == acme["tenant_id"]
    assert {user.tenant_id for user in users} == {acme["tenant_id"]}
