"""
client/app/i18n/loader.py

Bosnian / English catalogue of every text the client bot shows.

messages.txt holds one translation per line:

    bs:client:booking:select_time| "Odaberite vrijeme · %s"

Placeholders are %-style. A key missing in the requested language falls back
to Bosnian, then to the key itself, so a screen never breaks on a missing
text. Month and weekday names are comma-separated and read with t_list().
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_LANG = "bs"
MESSAGES_PATH = Path(__file__).resolve().parent / "messages.txt"

_ENTRY = re.compile(r'^(?P<lang>[a-z]{2}):(?P<key>[\w:]+)\|\s*"(?P<text>.*)"$')

# lang -> key -> text
_catalogue: dict[str, dict[str, str]] = {}


def load_messages(path: str | Path = MESSAGES_PATH) -> int:
    """Replace the catalogue with the contents of path; returns the number of texts."""
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"messages file not found: {path}")

    catalogue: dict[str, dict[str, str]] = {}
    for lineno, raw in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        entry = _ENTRY.match(line)
        if entry is None:
            logger.warning(f"[I18N] {path.name}:{lineno} skipped, not 'lang:key| \"text\"'")
            continue

        texts = catalogue.setdefault(entry["lang"], {})
        if entry["key"] in texts:
            logger.warning(f"[I18N] {path.name}:{lineno} redefines {entry['lang']}:{entry['key']}")
        texts[entry["key"]] = entry["text"].replace("\\n", "\n").strip()

    _catalogue.clear()
    _catalogue.update(catalogue)

    total = sum(len(texts) for texts in catalogue.values())
    logger.info(f"[I18N] {total} texts loaded for {', '.join(sorted(catalogue)) or 'no languages'}")
    return total


def normalize_lang(code: str | None) -> str:
    """Telegram language_code ("en-US", "bs") to a catalogue language."""
    if not code:
        return DEFAULT_LANG
    lang = code.split("-", 1)[0].lower()
    return lang if lang in _catalogue else DEFAULT_LANG


def t(key: str, lang: str | None = None, *args) -> str:
    text = (
        _catalogue.get(lang or DEFAULT_LANG, {}).get(key)
        or _catalogue.get(DEFAULT_LANG, {}).get(key)
        or key
    )

    if args:
        try:
            return text % args
        except (TypeError, ValueError):
            logger.warning(f"[I18N] {key}: cannot format with {len(args)} args")
            return text

    return text


def t_list(key: str, lang: str | None = None, size: int | None = None) -> list[str] | None:
    """
    Comma-separated text as a list.

    None when the text is missing or does not have exactly `size` items.
    """
    text = t(key, lang)
    if text == key:
        return None
    items = [item.strip() for item in text.split(",")]
    if size is not None and len(items) != size:
        logger.warning(f"[I18N] {key} ({lang}): expected {size} items, got {len(items)}")
        return None
    return items


def missing_keys(lang: str) -> set[str]:
    """Keys the default language has and lang does not."""
    return set(_catalogue.get(DEFAULT_LANG, {})) - set(_catalogue.get(lang, {}))


def get_available_langs() -> list[str]:
    return sorted(_catalogue)
