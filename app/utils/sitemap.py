from datetime import date
from typing import Iterable, Optional

STATIC_ROUTES = [
    "/", "/about", "/teachers", "/teacher-register", "/teacher-login",
    "/admin", "/admin-dashboard", "/teacher-dashboard", "/edit-teacher-profile",
    "/login", "/register",
]


def _url(loc: str, lastmod: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{loc}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>"
    )


def build_sitemap(teacher_ids: Iterable[int], base_url: str, today: Optional[date] = None) -> str:
    base_url = base_url.rstrip("/")
    lastmod = (today or date.today()).isoformat()

    urls = [
        _url(f"{base_url}{route}", lastmod, "1.0" if route == "/" else "0.7")
        for route in STATIC_ROUTES
    ]
    urls.extend(_url(f"{base_url}/teachers/{tid}", lastmod, "0.7") for tid in teacher_ids)

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(urls)
        + "\n</urlset>"
    )
