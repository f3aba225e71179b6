"""Konfiguration und Aufbau der Admin-Navigation.

Die Datei definiert den statischen Navigationsbaum ``NAV_SECTIONS`` sowie
die Funktionen, die daraus pro Anfrage die Sidebar erzeugen:

* ``augment`` ergänzt den Eintrag der Collages um die Collages des Benutzers,
* ``filter_sections`` blendet Einträge anhand der Rolle aus,
* ``build_sidebar`` wählt pro Eintrag die Darstellung und markiert den
  aktiven Pfad.

Der statische Baum wird dabei nie verändert, jede Stufe liefert neue Objekte.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Mapping, Sequence, TypedDict

from .roles import ADMIN_ROLES, Role, is_visible

logger = logging.getLogger("navigation")

SOON_BADGE = "Soon"


class NavKey(str, Enum):
    """Stabile Schlüssel für Abschnitte und Einträge der Navigation."""

    HOME = "home"
    MAIN_SITE = "main-site"
    DASHBOARD = "dashboard"
    OVERVIEW = "overview"
    ANALYTICS = "analytics"
    PORTFOLIOS = "portfolios"
    COLLAGES = "collages"
    FORMS = "forms"
    PROGRAMS = "programs"
    UNIVERSITY = "university"
    UNI_CONFIG = "uni-config"
    USERS = "users"
    STUDENT_MANAGEMENT = "student-management"
    STUDENTS = "students"
    ACHIEVEMENTS = "achievements"
    SYSTEM = "system"
    SETTINGS = "settings"


class ViewMode(str, Enum):
    """Darstellungsmodus der Sidebar."""

    EXPANDED = "expanded"
    COLLAPSED = "collapsed"
    MOBILE = "mobile"


class RenderMode(str, Enum):
    """Darstellung eines einzelnen Eintrags."""

    COLLAPSED_ICON = "collapsed_icon"
    EXPANDABLE = "expandable"
    FLAT = "flat"


@dataclass(frozen=True)
class NavSubItem:
    title: str
    route: str
    icon: str
    allowed_roles: frozenset[Role] | None = None
    logo_url: str | None = None


@dataclass(frozen=True)
class NavItem:
    """Ein Eintrag der Hauptnavigation.

    ``allowed_roles = None`` bedeutet: für alle Rollen sichtbar.
    """

    key: NavKey
    title: str
    route: str
    icon: str
    badge: str | None = None
    description: str | None = None
    dynamic_badge: bool = False
    allowed_roles: frozenset[Role] | None = None
    sub_items: tuple[NavSubItem, ...] = ()
    has_sub_items: bool = False


@dataclass(frozen=True)
class NavSection:
    key: NavKey
    title: str
    items: tuple[NavItem, ...]


OWNER_ONLY = frozenset({Role.OWNER})
SYSTEM_ROLES = frozenset({Role.OWNER, Role.SUPERADMIN})


NAV_SECTIONS: tuple[NavSection, ...] = (
    NavSection(
        key=NavKey.HOME,
        title="Home",
        items=(
            NavItem(
                key=NavKey.MAIN_SITE,
                title="Main Site",
                route="/",
                icon="home",
                description="Return to the university website",
            ),
        ),
    ),
    NavSection(
        key=NavKey.DASHBOARD,
        title="Dashboard",
        items=(
            NavItem(
                key=NavKey.OVERVIEW,
                title="Overview",
                route="/admin",
                icon="layout-dashboard",
                description="University dashboard and analytics",
                allowed_roles=ADMIN_ROLES,
            ),
            NavItem(
                key=NavKey.ANALYTICS,
                title="Analytics",
                route="/admin/analytics",
                icon="bar-chart",
                description="University statistics and insights",
                allowed_roles=ADMIN_ROLES,
                badge=SOON_BADGE,
            ),
        ),
    ),
    NavSection(
        key=NavKey.PORTFOLIOS,
        title="Portfolios Management",
        items=(
            NavItem(
                key=NavKey.COLLAGES,
                title="Collage",
                route="/admin/dashboard/collages",
                icon="folder-open",
                description="Manage university collages",
                allowed_roles=ADMIN_ROLES,
                dynamic_badge=True,
            ),
            NavItem(
                key=NavKey.FORMS,
                title="Forms",
                route="/admin/dashboard/forms",
                icon="clipboard-list",
                description="Collage forms and submissions",
                allowed_roles=ADMIN_ROLES,
                badge=SOON_BADGE,
            ),
            NavItem(
                key=NavKey.PROGRAMS,
                title="Programs",
                route="/admin/dashboard/programs",
                icon="book-open",
                description="Academic programs of the collages",
                allowed_roles=ADMIN_ROLES,
                badge=SOON_BADGE,
            ),
        ),
    ),
    NavSection(
        key=NavKey.UNIVERSITY,
        title="University",
        items=(
            NavItem(
                key=NavKey.UNI_CONFIG,
                title="University Config",
                route="/admin/dashboard/uni",
                icon="building",
                description="University content and social media links",
                allowed_roles=OWNER_ONLY,
            ),
            NavItem(
                key=NavKey.USERS,
                title="Users",
                route="/admin/dashboard/users",
                icon="users",
                description="Manage admin users and permissions",
                allowed_roles=SYSTEM_ROLES,
            ),
        ),
    ),
    NavSection(
        key=NavKey.STUDENT_MANAGEMENT,
        title="Student Management",
        items=(
            NavItem(
                key=NavKey.STUDENTS,
                title="Students",
                route="/admin/students",
                icon="graduation-cap",
                description="Manage student profiles",
                allowed_roles=ADMIN_ROLES,
                badge=SOON_BADGE,
            ),
            NavItem(
                key=NavKey.ACHIEVEMENTS,
                title="Achievements",
                route="/admin/achievements",
                icon="award",
                description="Student awards and certifications",
                allowed_roles=ADMIN_ROLES,
                badge=SOON_BADGE,
            ),
        ),
    ),
    NavSection(
        key=NavKey.SYSTEM,
        title="System",
        items=(
            NavItem(
                key=NavKey.SETTINGS,
                title="Settings",
                route="/admin/settings",
                icon="settings",
                description="System configuration",
                allowed_roles=SYSTEM_ROLES,
                badge=SOON_BADGE,
            ),
        ),
    ),
)


def get_nav_key(value: str) -> NavKey | None:
    """Liefert den ``NavKey`` zu ``value`` oder ``None``."""
    try:
        return NavKey(value)
    except ValueError:
        return None


# --- Dynamische Ergänzung -------------------------------------------------


def _build_sub_items(parent: NavItem, entities: Iterable[Mapping]) -> tuple[NavSubItem, ...]:
    sub_items: list[NavSubItem] = []
    for entity in entities:
        slug = entity.get("slug")
        if not slug:
            logger.warning("Collage ohne Slug übersprungen: %r", entity.get("name"))
            continue
        sub_items.append(
            NavSubItem(
                title=entity.get("name") or slug,
                route=f"{parent.route}/{slug}",
                icon="folder-open",
                allowed_roles=parent.allowed_roles,
                logo_url=entity.get("logoUrl") or None,
            )
        )
    return tuple(sub_items)


def augment(
    sections: Sequence[NavSection],
    owned: Sequence[Mapping] | None = None,
    member: Sequence[Mapping] | None = None,
) -> tuple[NavSection, ...]:
    """Ergänzt den Collage-Eintrag um die Collages des Benutzers.

    ``owned`` und ``member`` dürfen fehlen (``None``), etwa solange die Daten
    noch geladen werden; sie zählen dann als leer. Die Unterpunkte folgen
    der Reihenfolge eigene vor Mitgliedschaften, ohne Duplikate zu entfernen.
    Fehlt der Zieleintrag, wird der Baum unverändert zurückgegeben.
    """

    entities = [*(owned or ()), *(member or ())]
    result: list[NavSection] = []
    found = False

    for section in sections:
        if section.key != NavKey.PORTFOLIOS:
            result.append(section)
            continue
        items: list[NavItem] = []
        for item in section.items:
            if item.key != NavKey.COLLAGES:
                items.append(item)
                continue
            found = True
            sub_items = _build_sub_items(item, entities)
            changes = {"sub_items": sub_items, "has_sub_items": len(sub_items) > 0}
            if item.dynamic_badge:
                changes["badge"] = str(len(sub_items))
            items.append(replace(item, **changes))
        result.append(replace(section, items=tuple(items)))

    if not found:
        logger.debug("Kein Collage-Eintrag gefunden, Navigation bleibt unverändert")
    return tuple(result)


def filter_sections(sections: Sequence[NavSection], role: Role) -> tuple[NavSection, ...]:
    """Entfernt alle für ``role`` unsichtbaren Einträge und leere Abschnitte."""

    filtered: list[NavSection] = []
    for section in sections:
        items = tuple(item for item in section.items if is_visible(item, role))
        if items:
            filtered.append(replace(section, items=items))
    return tuple(filtered)


# --- Aktiver Pfad -----------------------------------------------------------


def normalize_path(path: str) -> str:
    """Entfernt abschließende Schrägstriche, ``/`` bleibt erhalten."""
    return path.rstrip("/") or "/"


def locale_href(locale: str, route: str) -> str:
    """Baut das Linkziel ``/<locale><route>``."""

    if not locale:
        return route
    if route == "/":
        return f"/{locale}/"
    return f"/{locale}{route}"


def is_active(current_path: str, locale: str, route: str) -> bool:
    """Vergleicht den aktuellen Pfad exakt mit dem Linkziel des Eintrags."""
    return normalize_path(current_path) == normalize_path(locale_href(locale, route))


# --- Darstellung ------------------------------------------------------------


def select_render_mode(view_mode: ViewMode, item: NavItem) -> RenderMode:
    """Wählt die Darstellung eines Eintrags.

    Im eingeklappten Modus gewinnt immer das Icon, unabhängig von
    Unterpunkten.
    """

    if view_mode == ViewMode.COLLAPSED:
        return RenderMode.COLLAPSED_ICON
    if item.has_sub_items:
        return RenderMode.EXPANDABLE
    return RenderMode.FLAT


def is_disabled(item: NavItem) -> bool:
    """Einträge mit dem Badge "Soon" sind nicht anklickbar."""
    return item.badge == SOON_BADGE


class RenderedSubItem(TypedDict):
    title: str
    href: str
    icon: str
    logo_url: str | None
    active: bool
    closes_overlay: bool


class RenderedItem(TypedDict):
    """Vorlagenfertige Darstellung eines Navigationseintrags."""

    key: str
    mode: str
    title: str
    description: str | None
    tooltip: str
    icon: str
    badge: str | None
    href: str
    active: bool
    disabled: bool
    open: bool
    closes_overlay: bool
    children: list[RenderedSubItem]


class RenderedSection(TypedDict):
    key: str
    title: str
    show_title: bool
    items: list[RenderedItem]


def render_item(
    item: NavItem,
    *,
    view_mode: ViewMode,
    current_path: str,
    locale: str,
    role: Role = Role.NONE,
    open_items: Mapping[str, bool] | None = None,
) -> RenderedItem:
    """Erzeugt die Darstellung eines einzelnen Eintrags."""

    mode = select_render_mode(view_mode, item)
    disabled = is_disabled(item)
    closes_overlay = view_mode == ViewMode.MOBILE
    is_open = mode == RenderMode.EXPANDABLE and bool((open_items or {}).get(item.key.value))

    tooltip = item.title
    if item.description:
        tooltip = f"{item.title}: {item.description}"

    children: list[RenderedSubItem] = []
    if is_open:
        for sub in item.sub_items:
            if not is_visible(sub, role):
                continue
            children.append(
                {
                    "title": sub.title,
                    "href": locale_href(locale, sub.route),
                    "icon": sub.icon,
                    "logo_url": sub.logo_url,
                    "active": is_active(current_path, locale, sub.route),
                    "closes_overlay": closes_overlay,
                }
            )

    return {
        "key": item.key.value,
        "mode": mode.value,
        "title": item.title,
        "description": item.description,
        "tooltip": tooltip,
        "icon": item.icon,
        "badge": item.badge,
        "href": "#" if disabled else locale_href(locale, item.route),
        "active": is_active(current_path, locale, item.route),
        "disabled": disabled,
        "open": is_open,
        "closes_overlay": closes_overlay,
        "children": children,
    }


def build_sidebar(
    sections: Sequence[NavSection],
    *,
    role: Role,
    view_mode: ViewMode,
    current_path: str,
    locale: str,
    open_items: Mapping[str, bool] | None = None,
) -> list[RenderedSection]:
    """Filtert ``sections`` nach Rolle und rendert alle sichtbaren Einträge."""

    rendered: list[RenderedSection] = []
    for section in filter_sections(sections, role):
        rendered.append(
            {
                "key": section.key.value,
                "title": section.title,
                "show_title": view_mode != ViewMode.COLLAPSED,
                "items": [
                    render_item(
                        item,
                        view_mode=view_mode,
                        current_path=current_path,
                        locale=locale,
                        role=role,
                        open_items=open_items,
                    )
                    for item in section.items
                ],
            }
        )
    return rendered
