"""Kontextprozessoren für die Django-Templates."""

from __future__ import annotations

from typing import TypedDict

from django.http import HttpRequest
from django.utils.translation import get_language

from .collage_cache import get_collage_collections
from .navigation import NAV_SECTIONS, RenderedSection, ViewMode, augment, build_sidebar
from .roles import Role, resolve_role, role_label

SESSION_COLLAPSED = "sidebar_collapsed"
SESSION_OPEN_ITEMS = "nav_open"


def current_role(request: HttpRequest) -> Role:
    role = getattr(request, "user_role", None)
    if role is None:
        role = resolve_role(request.user)
    return role


def current_locale(request: HttpRequest) -> str:
    return getattr(request, "LANGUAGE_CODE", None) or get_language() or ""


def get_open_items(request: HttpRequest) -> dict[str, bool]:
    """Aufklappzustand der Navigationseinträge aus der Session."""

    value = request.session.get(SESSION_OPEN_ITEMS)
    if not isinstance(value, dict):
        return {}
    return {str(k): bool(v) for k, v in value.items()}


class Sidebar(TypedDict):
    """Alles, was ``partials/sidebar.html`` zum Rendern benötigt."""

    collapsed: bool
    desktop: list[RenderedSection]
    mobile: list[RenderedSection]
    role: str
    role_label: str


def admin_sidebar(request: HttpRequest) -> dict[str, Sidebar | None]:
    """Stellt Desktop- und Mobil-Sidebar für den aktuellen Benutzer bereit.

    Beide Varianten basieren auf demselben, um die Collages des Benutzers
    ergänzten Navigationsbaum. Die Desktop-Variante folgt dem in der Session
    gespeicherten Einklappzustand, die mobile Variante ist immer ausgeklappt.
    """

    if not request.user.is_authenticated:
        return {"sidebar": None}

    role = current_role(request)
    owned, member = get_collage_collections(request.user)
    sections = augment(NAV_SECTIONS, owned, member)

    collapsed = bool(request.session.get(SESSION_COLLAPSED, False))
    common = {
        "role": role,
        "current_path": request.path,
        "locale": current_locale(request),
        "open_items": get_open_items(request),
    }
    desktop_mode = ViewMode.COLLAPSED if collapsed else ViewMode.EXPANDED

    return {
        "sidebar": {
            "collapsed": collapsed,
            "desktop": build_sidebar(sections, view_mode=desktop_mode, **common),
            "mobile": build_sidebar(sections, view_mode=ViewMode.MOBILE, **common),
            "role": role.value,
            "role_label": role_label(role),
        }
    }


def breadcrumbs(request: HttpRequest) -> dict[str, list[dict[str, str | None]]]:
    """Erzeugt Breadcrumbs basierend auf dem Anfragepfad.

    Liefert eine Liste von ``{"url": str | None, "label": str}``. Das
    Sprachpräfix erscheint nicht als eigener Eintrag.
    """

    segments = [p for p in request.path.split("/") if p]
    locale = current_locale(request)
    prefix = "/"
    if segments and segments[0] == locale:
        prefix = f"/{locale}/"
        segments = segments[1:]
    if not segments:
        return {"breadcrumbs": []}

    mappings = {
        "admin": "Admin",
        "dashboard": "Dashboard",
        "collages": "Collages",
        "uni": "University Config",
        "users": "Users",
    }
    # Zwischenebenen ohne eigene Seite
    no_link = {"dashboard"}

    crumbs: list[dict[str, str | None]] = []
    for idx, segment in enumerate(segments):
        label = mappings.get(segment, segment.replace("-", " ").capitalize())
        is_last = idx == len(segments) - 1
        url = None
        if not is_last and segment not in no_link:
            url = prefix + "/".join(segments[: idx + 1])
        crumbs.append({"url": url, "label": label})

    return {"breadcrumbs": crumbs}
