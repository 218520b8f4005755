API = "/api/v1"
PASSWORD = "correct-horse-battery"


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, *, email, domain, tenant_name="Acme", password=PASSWORD):
    return client.post(f"{API}/auth/register", json={
        "email": email,
        "password": password,
        "firstName": "Ada",
        "lastName": "Admin",
        "tenantName": tenant_name,
        "tenantDomain": domain,
    })


def tenant_account(client, *, email, domain, tenant_name):
    resp = register(client, email=email, domain=domain, tenant_name=tenant_name)
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    return {
        "user_id": body["user"]["id"],
        "tenant_id": body["tenant"]["id"],
        "headers": bearer(body["tokens"]["accessToken"]),
        "tokens": body["tokens"],
    }


def create_site(client, headers, *, name="Blog", domain=None):
    body = {"name": name}
    if domain:
        body["domain"] = domain
    resp = client.post(f"{API}/sites", json=body, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["site"]


def create_page(client, headers, site_id, slug, **extra):
    body = {"siteId": site_id, "title": slug.title(), "slug": slug}
    body.update(extra)
    return client.post(f"{API}/pages", json=body, headers=headers)


def create_media(client, headers, site_id, filename, mime_type="image/png", **extra):
    body = {
        "siteId": site_id,
        "filename": filename,
        "originalName": filename,
        "mimeType": mime_type,
        "size": 1024,
        "url": f"https://cdn.acme.com/{filename}",
    }
    body.update(extra)
    return client.post(f"{API}/media", json=body, headers=headers)
