"""Message catalog port for user-facing error text.

The core only chooses a message identifier and its domain (``"errors"``);
rendering the text in a locale belongs to the catalog.
"""

from __future__ import annotations

import gettext
from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageCatalog(Protocol):
    """Looks up rendered text for a message identifier."""

    def lookup(self, domain: str, message_id: str) -> str:
        """Return the text for ``message_id`` in ``domain``."""
        ...


class GettextMessageCatalog:
    """MessageCatalog backed by compiled gettext catalogs.

    Missing catalogs and missing entries fall back to the identifier itself,
    which is the English text.
    """

    def __init__(self, locale_dir: str | None = None, locale: str = "en") -> None:
        self._locale_dir = locale_dir
        self._locale = locale
        self._translations: dict[str, gettext.NullTranslations] = {}

    def lookup(self, domain: str, message_id: str) -> str:
        """Return the translated text, or ``message_id`` when untranslated."""
        return self._translation(domain).gettext(message_id)

    def _translation(self, domain: str) -> gettext.NullTranslations:
        if domain not in self._translations:
            self._translations[domain] = gettext.translation(
                domain,
                localedir=self._locale_dir,
                languages=[self._locale],
                fallback=True,
            )
        return self._translations[domain]
