from __future__ import annotations

from .models import Collage
from .roles import Role


def collage_to_dict(collage: Collage) -> dict[str, str]:
    """Serialisiert eine Collage für Navigation und API."""

    return {
        "name": collage.name,
        "slug": collage.slug,
        "logoUrl": collage.logo_url,
    }


def get_owned_collages(user_id: int) -> list[dict[str, str]]:
    """Liefert die vom Benutzer angelegten Collages."""

    qs = Collage.objects.filter(created_by_id=user_id)
    return [collage_to_dict(c) for c in qs]


def get_member_collages(user_id: int) -> list[dict[str, str]]:
    """Liefert die Collages, in denen der Benutzer Mitglied ist."""

    qs = Collage.objects.filter(members__id=user_id).distinct()
    return [collage_to_dict(c) for c in qs]


def user_can_access_collage(user, collage: Collage, role: Role) -> bool:
    """Prüft, ob ``user`` die Detailseite von ``collage`` sehen darf.

    Owner und Superadmins sehen alle Collages, Admins nur eigene und solche,
    in denen sie Mitglied sind.
    """

    if role in (Role.OWNER, Role.SUPERADMIN):
        return True
    if role != Role.ADMIN:
        return False
    if collage.created_by_id == user.id:
        return True
    return collage.members.filter(pk=user.pk).exists()
