"""Hilfsfilter für benutzerbezogenes Logging."""

from __future__ import annotations

import logging


class UserContextFilter(logging.Filter):
    """Stellt sicher, dass jeder Logeintrag ein ``user_id``-Attribut besitzt.

    Aufrufer übergeben die ID über ``extra={"user_id": ...}``; fehlt sie,
    wird ``default`` eingesetzt, damit Formatter mit ``%(user_id)s`` nicht
    scheitern.
    """

    def __init__(self, default: str = "-") -> None:
        super().__init__()
        self.default = default

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - Django-Style
        """Ergänzt fehlende Benutzerangaben und lässt den Eintrag passieren."""
        if getattr(record, "user_id", None) is None:
            record.user_id = self.default
        return True
