"""Zwischenspeicher für die Collages eines Benutzers in der Navigation.

Die Sidebar zeigt die eigenen Collages und die Mitgliedschaften des
Benutzers. Die Daten werden nach dem Prinzip "stale while revalidate"
gehalten: ein Eintrag gilt ``NAVIGATION_CACHE_FRESHNESS`` Sekunden als
frisch. Ein veralteter Eintrag wird sofort ausgeliefert und im Hintergrund
über Django-Q aktualisiert. Einträge sind an die Benutzer-ID gebunden, eine
Aktualisierung schreibt ausschließlich den Schlüssel ihres Benutzers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError
from django_q.tasks import async_task

from .utils import get_member_collages, get_owned_collages

logger = logging.getLogger("navigation")

REFRESH_TASK = "core.collage_cache.refresh_collage_collections"
LOCK_TIMEOUT = 60

Collections = tuple[list[dict[str, str]] | None, list[dict[str, str]] | None]


@dataclass
class CacheEntry:
    user_id: int
    owned: list[dict[str, str]]
    member: list[dict[str, str]]
    fetched_at: float
    freshness_window: float

    def is_stale(self, now: float | None = None) -> bool:
        """Gibt ``True`` zurück, sobald das Frischefenster abgelaufen ist."""
        if now is None:
            now = time.time()
        return now - self.fetched_at >= self.freshness_window


def cache_key(user_id: int) -> str:
    return f"navigation:collages:{user_id}"


def lock_key(user_id: int) -> str:
    return f"navigation:collages:{user_id}:refreshing"


def generation_key(user_id: int) -> str:
    return f"navigation:collages:{user_id}:generation"


def get_generation(user_id: int) -> int:
    return int(cache.get(generation_key(user_id), 0))


def _bump_generation(user_id: int) -> None:
    key = generation_key(user_id)
    cache.add(key, 0, None)
    try:
        cache.incr(key)
    except ValueError:
        # Schlüssel zwischen add und incr verdrängt
        cache.set(key, 1, None)


def _freshness_window() -> float:
    return float(getattr(settings, "NAVIGATION_CACHE_FRESHNESS", 300))


def _cache_timeout() -> int:
    return int(getattr(settings, "NAVIGATION_CACHE_TIMEOUT", 24 * 60 * 60))


def get_entry(user_id: int) -> CacheEntry | None:
    """Liest den Eintrag für ``user_id``; fremde oder defekte Einträge zählen nicht."""

    entry = cache.get(cache_key(user_id))
    if not isinstance(entry, CacheEntry) or entry.user_id != user_id:
        return None
    return entry


def refresh_collage_collections(user_id: int) -> bool:
    """Lädt eigene und Mitglieds-Collages neu und legt sie im Cache ab.

    Wird als Django-Q-Task ausgeführt. Bei Datenbankfehlern bleibt der
    bisherige Eintrag erhalten. Wurde der Benutzer während des Ladens
    invalidiert, verwirft der Task sein Ergebnis; die nächste Anfrage lädt neu.
    """

    generation = get_generation(user_id)
    try:
        owned = get_owned_collages(user_id)
        member = get_member_collages(user_id)
    except DatabaseError:
        logger.exception("Collages für Benutzer %s konnten nicht geladen werden", user_id)
        cache.delete(lock_key(user_id))
        return False

    if get_generation(user_id) != generation:
        logger.debug(
            "Navigation für Benutzer %s während der Aktualisierung invalidiert, Ergebnis verworfen",
            user_id,
            extra={"user_id": user_id},
        )
        cache.delete(lock_key(user_id))
        return False

    entry = CacheEntry(
        user_id=user_id,
        owned=owned,
        member=member,
        fetched_at=time.time(),
        freshness_window=_freshness_window(),
    )
    cache.set(cache_key(user_id), entry, _cache_timeout())
    if get_generation(user_id) != generation:
        # Invalidierung zwischen Prüfung und Schreiben
        cache.delete(cache_key(user_id))
    cache.delete(lock_key(user_id))
    logger.debug(
        "Navigation für Benutzer %s aktualisiert: %s eigene, %s Mitgliedschaften",
        user_id,
        len(owned),
        len(member),
        extra={"user_id": user_id},
    )
    return True


def schedule_refresh(user_id: int) -> bool:
    """Stößt eine Aktualisierung im Hintergrund an.

    Läuft für den Benutzer bereits eine Aktualisierung, passiert nichts.
    """

    if not cache.add(lock_key(user_id), True, LOCK_TIMEOUT):
        return False
    try:
        async_task(REFRESH_TASK, user_id)
    except Exception:
        logger.exception("Aktualisierung für Benutzer %s konnte nicht gestartet werden", user_id)
        cache.delete(lock_key(user_id))
        return False
    return True


def get_collage_collections(user) -> Collections:
    """Liefert ``(owned, member)`` für die Navigation von ``user``.

    Solange noch keine Daten vorliegen, ist das Ergebnis ``(None, None)``.
    """

    if user is None or not getattr(user, "is_authenticated", False):
        return None, None

    entry = get_entry(user.pk)
    if entry is None:
        schedule_refresh(user.pk)
        # Ein synchron laufender Worker hat den Eintrag eventuell schon geschrieben.
        entry = get_entry(user.pk)
        if entry is None:
            return None, None
    elif entry.is_stale():
        schedule_refresh(user.pk)
    return entry.owned, entry.member


def invalidate(user_id: int) -> None:
    """Verwirft den Eintrag von ``user_id``.

    Eine laufende Aktualisierung verwirft danach ihr Ergebnis. Die Sperre
    wird freigegeben, die nächste Anfrage lädt sofort neu.
    """
    invalidate_many([user_id])


def invalidate_many(user_ids: Iterable[int]) -> None:
    """Verwirft die Einträge mehrerer Benutzer."""
    ids = {uid for uid in user_ids if uid is not None}
    for uid in ids:
        _bump_generation(uid)
    cache.delete_many([key for uid in ids for key in (cache_key(uid), lock_key(uid))])
