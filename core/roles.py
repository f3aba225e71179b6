"""Rollenmodell und Sichtbarkeitsprüfung für die Admin-Navigation."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from django.db import models

logger = logging.getLogger(__name__)


class Role(models.TextChoices):
    """Zugriffsstufen der Anwendung.

    ``NONE`` steht für "keine Rolle" und wird für anonyme Benutzer sowie
    unbekannte Werte aus der Identitätsquelle verwendet.
    """

    OWNER = "OWNER", "Owner"
    SUPERADMIN = "SUPERADMIN", "Superadmin"
    ADMIN = "ADMIN", "Admin"
    GUEST = "GUEST", "Guest"
    NONE = "NONE", "Keine Rolle"


# Auswahl für Modellfelder, ``NONE`` wird nie gespeichert.
ROLE_CHOICES = [(value, label) for value, label in Role.choices if value != Role.NONE]

ADMIN_ROLES = frozenset({Role.OWNER, Role.SUPERADMIN, Role.ADMIN})

ROLE_LABELS = {
    Role.OWNER: "System Administrator",
    Role.SUPERADMIN: "System Administrator",
}


class HasAllowedRoles(Protocol):
    allowed_roles: frozenset[Role] | None


def parse_role(value: Any) -> Role:
    """Wandelt einen beliebigen Wert sicher in eine ``Role`` um.

    Unbekannte oder fehlende Werte ergeben ``Role.NONE``.
    """

    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return Role.NONE
    normalized = value.strip().upper()
    if not normalized or normalized == Role.NONE:
        return Role.NONE
    try:
        return Role(normalized)
    except ValueError:
        logger.debug("Unbekannte Rolle %r", value)
        return Role.NONE


def resolve_role(user) -> Role:
    """Ermittelt die Rolle des angemeldeten Benutzers."""

    if user is None or not getattr(user, "is_authenticated", False):
        return Role.NONE
    profile = getattr(user, "profile", None)
    if profile is None:
        return Role.NONE
    return parse_role(profile.user_type)


def role_label(role: Role) -> str:
    """Anzeigename der Rolle im Sidebar-Kopf."""
    return ROLE_LABELS.get(role, "Department Admin")


def is_visible(item: HasAllowedRoles, role: Role) -> bool:
    """Prüft, ob ``item`` für ``role`` sichtbar ist.

    Einträge ohne ``allowed_roles`` sind für alle sichtbar. Sonst muss die
    Rolle enthalten sein; ``Role.NONE`` passt auf keine Menge.
    """

    if item.allowed_roles is None:
        return True
    if role == Role.NONE:
        return False
    return role in item.allowed_roles
