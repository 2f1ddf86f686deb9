"""Site navigation: page list, base path and link resolution."""

from __future__ import annotations
from dataclasses import dataclass
from html import escape
from typing import Dict, List

LOCAL_HOSTS = {"localhost", "127.0.0.1"}


@dataclass(frozen=True)
class NavLink:
    title: str
    href: str
    view: str
    external: bool
    current: bool = False


def base_path_for(host: str, deploy_path: str = "/portfolio/") -> str:
    """'/' when served locally, otherwise the deploy path."""
    hostname = (host or "").split(":")[0].lower()
    return "/" if hostname in LOCAL_HOSTS else deploy_path


def view_for(url: str) -> str:
    """'projects/' → 'projects', '' → 'home'."""
    slug = url.strip("/").split("/")[0]
    return slug or "home"


def resolve_url(url: str, base_path: str) -> str:
    """External links pass through; internal pages route via the ?view= query param."""
    if url.startswith("http"):
        return url
    view = view_for(url)
    return base_path if view == "home" else f"{base_path}?view={view}"


def build_nav(pages: List[Dict[str, str]], base_path: str, current_view: str) -> List[NavLink]:
    links = []
    for p in pages:
        url, title = p["url"], p["title"]
        external = url.startswith("http")
        view = "" if external else view_for(url)
        links.append(NavLink(
            title=title,
            href=resolve_url(url, base_path),
            view=view,
            external=external,
            current=not external and view == current_view,
        ))
    return links


def known_views(links: List[NavLink]) -> List[str]:
    return [link.view for link in links if not link.external]


def nav_bar_html(links: List[NavLink]) -> str:
    parts = []
    for link in links:
        attrs = ' target="_blank" rel="noopener"' if link.external else ' target="_self"'
        cls = ' class="current"' if link.current else ""
        parts.append(f'<a href="{escape(link.href)}"{cls}{attrs}>{escape(link.title)}</a>')
    return f"<nav class='site-nav'>{''.join(parts)}</nav>"
