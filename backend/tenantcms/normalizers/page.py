from typing import Any, Dict

from tenantcms.models import Page
from .timestamps import iso


def normalize_page_summary(page: Page) -> Dict[str, Any]:
    return {
        "id": page.id,
        "title": page.title,
        "slug": page.slug,
        "status": page.status.value,
        "isHomePage": page.is_home_page,
        "updatedAt": iso(page.updated_at),
    }


def normalize_page(page: Page, *, detail: bool = False) -> Dict[str, Any]:
    """
    Full page representation.

    ``detail`` adds the author's names and a summary of the owning site.
    """
    data = {
        "id": page.id,
        "siteId": page.site_id,
        "title": page.title,
        "slug": page.slug,
        "content": page.content or {},
        "excerpt": page.excerpt,
        "status": page.status.value,
        "isHomePage": page.is_home_page,
        "publishedAt": iso(page.published_at),
        "authorId": page.author_id,
        "seoTitle": page.seo_title,
        "seoDescription": page.seo_description,
        "featuredImage": page.featured_image,
        "createdAt": iso(page.created_at),
        "updatedAt": iso(page.updated_at),
    }

    if detail:
        author = page.author
        data["author"] = {
            "id": author.id,
            "firstName": author.first_name,
            "lastName": author.last_name,
            "email": author.email,
        } if author else None
        data["site"] = {
            "id": page.site.id,
            "name": page.site.name,
            "domain": page.site.domain,
        }

    return data
