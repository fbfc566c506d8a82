"""gettext-backed string lookup.

Every user-facing label goes through ``_``. Message ids are English; when no
catalog is installed for the requested language the id itself is shown.
"""

import gettext
from pathlib import Path

DOMAIN = "npu_status"
LOCALE_DIR = Path(__file__).parent / "locale"

_translation = gettext.NullTranslations()


def install(languages=None, localedir=LOCALE_DIR):
    """Switch the active catalog. ``languages`` is a list like ``["zh_CN"]``."""
    global _translation
    if isinstance(languages, str):
        languages = [languages]
    _translation = gettext.translation(
        DOMAIN, localedir=str(localedir), languages=languages, fallback=True
    )
    return _translation


def _(message):
    return _translation.gettext(message)
