from __future__ import annotations

"""
Internationalization (i18n) utility module for user-facing messages.

This module provides functionality for:
- Loading and managing message catalogues for multiple languages
- Translating message keys based on the caller's language
- Fallback mechanisms for missing translations
- Logging of translation-related events

The module uses Python's built-in gettext for translation management and
supports the languages configured in the application settings. Catalogue
entries may contain ``str.format`` placeholders (``{field_name}``,
``{minutes}``) which callers fill in after translation.
"""

import gettext
import os
import threading
from typing import Dict, Optional

import structlog

from blueprint.core.config.settings import settings

logger = structlog.get_logger(__name__)

LOCALES_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "locales"))

# Store translations for each language
_translations: Dict[str, gettext.NullTranslations] = {}

# ---------------------------------------------------------------------------
# Internal fallback catalogue (parsed from *.po* files)
# ---------------------------------------------------------------------------

# Only the *.po* sources are shipped. When no compiled *.mo* file is present
# gettext returns the msgid unchanged, so the *.po* entries are parsed into a
# lightweight in-memory catalogue used as a secondary lookup.

_fallback_catalogs: Dict[str, Dict[str, str]] = {}
_setup_lock = threading.Lock()


def _unquote(value: str) -> str:
    """Strips the surrounding quotes of a .po string and resolves escapes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return value.replace('\\"', '"').replace("\\n", "\n").replace("\\\\", "\\")


def _parse_po_file(po_path: str) -> Dict[str, str]:
    """Reads single-line msgid/msgstr pairs from a .po file."""
    catalog: Dict[str, str] = {}
    current_msgid: Optional[str] = None
    with open(po_path, "r", encoding="utf-8") as po_file:
        for raw_line in po_file:
            line = raw_line.strip()
            if line.startswith("msgid "):
                current_msgid = _unquote(line[6:])
            elif line.startswith("msgstr ") and current_msgid is not None:
                msgstr = _unquote(line[7:])
                if current_msgid:
                    catalog[current_msgid] = msgstr or current_msgid
                current_msgid = None
    return catalog


def setup_i18n(locales_path: str = LOCALES_PATH) -> None:
    """
    Initialize the internationalization system by loading translations.

    Loads translation files for each supported language from the locales
    directory and parses the .po sources as a fallback catalogue.

    Raises:
        FileNotFoundError: If the locales directory is not found.
    """
    if not os.path.exists(locales_path):
        raise FileNotFoundError(f"Locales directory not found: {locales_path}")

    for lang in settings.SUPPORTED_LANGUAGES:
        _translations[lang] = gettext.translation(
            domain="messages",
            localedir=locales_path,
            languages=[lang],
            fallback=True,
        )

        po_path = os.path.join(locales_path, lang, "LC_MESSAGES", "messages.po")
        catalog: Dict[str, str] = {}
        if os.path.exists(po_path):
            try:
                catalog = _parse_po_file(po_path)
            except (OSError, UnicodeDecodeError) as exc:  # pragma: no cover
                logger.warning("i18n_po_parse_failed", lang=lang, error=str(exc))

        _fallback_catalogs[lang] = catalog
        logger.debug("i18n_initialized", language=lang, entries=len(catalog))

    logger.debug("i18n_setup_complete", default_locale=settings.DEFAULT_LANGUAGE)


def _ensure_loaded() -> None:
    if _translations:
        return
    with _setup_lock:
        if not _translations:
            setup_i18n()


def get_translated_message(key: str, locale: str = settings.DEFAULT_LANGUAGE) -> str:
    """
    Retrieve a translated message for the given key and locale.

    Validates the requested locale, attempts translation, and falls back to the
    default language or key if needed.

    Args:
        key: The message key to translate.
        locale: The target language code (defaults to DEFAULT_LANGUAGE).

    Returns:
        The translated message or the original key if translation fails.
    """
    _ensure_loaded()

    if locale not in _translations:
        logger.warning("unsupported_locale_requested", requested_locale=locale,
                       fallback_locale=settings.DEFAULT_LANGUAGE)
        locale = settings.DEFAULT_LANGUAGE

    translation = _translations.get(locale)
    if not translation:
        logger.error("translation_missing_for_locale", locale=locale)
        return key

    translated = translation.gettext(key)
    if translated == key:
        translated = _fallback_catalogs.get(locale, {}).get(key, key)
        if translated == key and locale != settings.DEFAULT_LANGUAGE:
            translated = _fallback_catalogs.get(settings.DEFAULT_LANGUAGE, {}).get(key, key)
        if translated == key:
            logger.warning("translation_key_not_found", key=key, locale=locale)

    return translated
