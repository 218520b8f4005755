from tenantcms.domain.roles import Role
from tenantcms.models import Site

from .helpers import API, create_media, create_page, create_site


def test_only_admins_manage_sites(client, acme, make_user):
    _, editor = make_user(acme["tenant_id"], Role.EDITOR, "ed@acme.com")

    resp = client.post(f"{API}/sites", json={"name": "Blog"}, headers=editor)

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "insufficient_role"
    assert "Required role: ADMIN or SUPER_ADMIN" in resp.get_json()["message"]


def test_create_site_defaults(client, acme):
    site = create_site(client, acme["headers"], name="Blog", domain="blog.acme.com")

    assert site["tenantId"] == acme["tenant_id"]
    assert site["theme"] == "default"
    assert site["isPublished"] is False
    assert site["seoSettings"] == {}


def test_site_domain_is_globally_unique(client, acme, globex):
    create_site(client, acme["headers"], domain="blog.acme.com")

    resp = client.post(f"{API}/sites", json={"name": "Copy", "domain": "blog.acme.com"}, headers=globex["headers"])

    assert resp.status_code == 409
    assert resp.get_json()["details"] == {"scope": "site.domain", "key": "blog.acme.com"}


def test_list_includes_counts(client, acme):
    site = create_site(client, acme["headers"])
    create_page(client, acme["headers"], site["id"], "one")
    create_page(client, acme["headers"], site["id"], "two")
    create_media(client, acme["headers"], site["id"], "a.png")

    listed = client.get(f"{API}/sites", headers=acme["headers"]).get_json()["sites"][0]

    assert listed["pageCount"] == 2
    assert listed["mediaCount"] == 1
    assert {page["slug"] for page in listed["pages"]} == {"one", "two"}


def test_detail_includes_pages_and_recent_media(client, acme):
    site = create_site(client, acme["headers"])
    create_page(client, acme["headers"], site["id"], "one")
    for index in range(12):
        create_media(client, acme["headers"], site["id"], f"img-{index}.png")

    detail = client.get(f"{API}/sites/{site['id']}", headers=acme["headers"]).get_json()["site"]

    assert len(detail["pages"]) == 1
    assert len(detail["media"]) == 10


def test_update_site_rechecks_domain_only_when_changed(client, acme):
    site = create_site(client, acme["headers"], name="Blog", domain="blog.acme.com")
    create_site(client, acme["headers"], name="Shop", domain="shop.acme.com")

    unchanged = client.put(
        f"{API}/sites/{site['id']}",
        json={"domain": "blog.acme.com", "seoSettings": {"defaultTitle": "Acme"}},
        headers=acme["headers"],
    )
    taken = client.put(f"{API}/sites/{site['id']}", json={"domain": "shop.acme.com"}, headers=acme["headers"])

    assert unchanged.status_code == 200
    assert unchanged.get_json()["site"]["seoSettings"]["defaultTitle"] == "Acme"
    assert taken.status_code == 409


def test_update_site_rejects_stale_write(client, acme):
    site = create_site(client, acme["headers"])

    resp = client.put(
        f"{API}/sites/{site['id']}",
        json={"name": "Renamed"},
        headers={**acme["headers"], "If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
    )
    fresh = client.put(
        f"{API}/sites/{site['id']}",
        json={"name": "Renamed"},
        headers={**acme["headers"], "If-Unmodified-Since": "Fri, 01 Jan 2100 00:00:00 GMT"},
    )

    assert resp.status_code == 409
    assert fresh.status_code == 200


def test_publish_toggle(client, acme):
    site = create_site(client, acme["headers"])

    published = client.patch(f"{API}/sites/{site['id']}/publish", json={"isPublished": True}, headers=acme["headers"])
    unpublished = client.patch(f"{API}/sites/{site['id']}/publish", json={"isPublished": False}, headers=acme["headers"])
    not_bool = client.patch(f"{API}/sites/{site['id']}/publish", json={"isPublished": "yes"}, headers=acme["headers"])

    assert published.get_json()["site"]["isPublished"] is True
    assert unpublished.get_json()["site"]["isPublished"] is False
    assert not_bool.status_code == 400


def test_delete_site_cascades(client, acme):
    site = create_site(client, acme["headers"])
    page = create_page(client, acme["headers"], site["id"], "one").get_json()["page"]
    media = create_media(client, acme["headers"], site["id"], "a.png").get_json()["media"]

    resp = client.delete(f"{API}/sites/{site['id']}", headers=acme["headers"])

    assert resp.status_code == 200
    assert client.get(f"{API}/sites/{site['id']}", headers=acme["headers"]).status_code == 404
    assert client.get(f"{API}/pages/{page['id']}", headers=acme["headers"]).status_code == 404
    assert client.get(f"{API}/media/{media['id']}", headers=acme["headers"]).status_code == 404


def test_seo_settings_are_stored_alike_on_create_and_update(client, acme, session):
    seo = {"defaultTitle": None, "defaultDescription": "Shop", "keywords": ["shoes"]}
    created = client.post(f"{API}/sites", json={"name": "Shop", "seoSettings": seo}, headers=acme["headers"])
    other = create_site(client, acme["headers"], name="Blog")
    updated = client.put(f"{API}/sites/{other['id']}", json={"seoSettings": seo}, headers=acme["headers"])

    expected = {"defaultDescription": "Shop", "keywords": ["shoes"]}
    assert created.get_json()["site"]["seoSettings"] == expected
    assert updated.get_json()["site"]["seoSettings"] == expected

    stored = [
        session.get(Site, site_id).seo_settings
        for site_id in (created.get_json()["site"]["id"], other["id"])
    ]
    assert stored == [{"default_description": "Shop", "keywords": ["shoes"]}] * 2
