from tenantcms.models import Site


def set_site_published(site: Site, is_published: bool) -> bool:
    """Toggle a site's publication flag; returns whether it changed."""
    changed = bool(site.is_published) != bool(is_published)
    site.is_published = bool(is_published)
    return changed
