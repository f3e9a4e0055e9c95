"""
Language resolution for chat messages.

The reply language is picked with the following priority:
  1. The language the client selected, when it is a supported code
  2. An explicit request in the message ("explain in Telugu", "hindi mein batao")
  3. The Unicode script the message is written in
  4. English
"""

import logging
import re
from typing import List, Optional, Pattern, Tuple

from vidhisahayak.core.constants import AUTO_LANGUAGE, DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


LANG_NAMES = {
    "hi-IN": "Hindi",
    "te-IN": "Telugu",
    "ta-IN": "Tamil",
    "bn-IN": "Bengali",
    "ml-IN": "Malayalam",
    "kn-IN": "Kannada",
    "mr-IN": "Marathi",
    "gu-IN": "Gujarati",
    "pa-IN": "Punjabi",
    "ur-IN": "Urdu",
    "en-IN": "English",
}

LANG_OPTIONS = [
    {"code": "auto", "label": "Auto"},
    {"code": "en-IN", "label": "English"},
    {"code": "hi-IN", "label": "हिंदी"},
    {"code": "te-IN", "label": "తెలుగు"},
    {"code": "ta-IN", "label": "தமிழ்"},
    {"code": "bn-IN", "label": "বাংলা"},
    {"code": "ml-IN", "label": "മലയാളം"},
    {"code": "kn-IN", "label": "ಕನ್ನಡ"},
    {"code": "gu-IN", "label": "ગુજરાતી"},
    {"code": "pa-IN", "label": "ਪੰਜਾਬੀ"},
    {"code": "mr-IN", "label": "मराठी"},
    {"code": "ur-IN", "label": "اردو"},
]

# Unicode blocks, checked in order. Marathi shares Devanagari with Hindi.
SCRIPT_RANGES: List[Tuple[Pattern, str]] = [
    (re.compile(r"[ऀ-ॿ]"), "hi-IN"),  # Devanagari
    (re.compile(r"[ఀ-౿]"), "te-IN"),  # Telugu
    (re.compile(r"[஀-௿]"), "ta-IN"),  # Tamil
    (re.compile(r"[ঀ-৿]"), "bn-IN"),  # Bengali
    (re.compile(r"[ഀ-ൿ]"), "ml-IN"),  # Malayalam
    (re.compile(r"[ಀ-೿]"), "kn-IN"),  # Kannada
    (re.compile(r"[઀-૿]"), "gu-IN"),  # Gujarati
    (re.compile(r"[਀-੿]"), "pa-IN"),  # Gurmukhi
    (re.compile(r"[؀-ۿ]"), "ur-IN"),  # Arabic script
]

# Explicit requests, in English, transliterated or native script
EXPLICIT_PATTERNS: List[Tuple[Pattern, str]] = [
    (re.compile(r"\btelugu\b|\btelugu\s*lo\b|తెలుగులో|తెలుగు\s*లో", re.IGNORECASE), "te-IN"),
    (re.compile(r"\bhindi\b|\bhindi\s*(?:mein|me|mai|main)\b|हिंदी\s*में", re.IGNORECASE), "hi-IN"),
    (re.compile(r"\btamil\b|\btamil\s*(?:la|il)\b|\btamizh\b", re.IGNORECASE), "ta-IN"),
    (re.compile(r"\bbengali\b|\bbangla\b|\bbengali\s*te\b", re.IGNORECASE), "bn-IN"),
    (re.compile(r"\bmalayalam\b|\bmalayalam\s*il\b|\bmalayaalam\b", re.IGNORECASE), "ml-IN"),
    (re.compile(r"\bkannada\b|\bkannada\s*alli\b|\bkannad\b", re.IGNORECASE), "kn-IN"),
    (re.compile(r"\bgujarati\b|\bgujarati\s*ma\b|\bgujrati\b", re.IGNORECASE), "gu-IN"),
    (re.compile(r"\bpunjabi\b|\bpanjabi\b|\bpunjabi\s*vich\b", re.IGNORECASE), "pa-IN"),
    (re.compile(r"\bmarathi\b|\bmarathi\s*(?:madhe|me)\b", re.IGNORECASE), "mr-IN"),
    (re.compile(r"\burdu\b|\burdu\s*mein\b", re.IGNORECASE), "ur-IN"),
    (re.compile(r"\bin\s*english\b|\breply\s*in\s*english\b", re.IGNORECASE), "en-IN"),
]


def detect_language_from_script(text: str) -> str:
    """Detect the language from the script the text is written in."""
    for pattern, code in SCRIPT_RANGES:
        if pattern.search(text or ""):
            return code
    return DEFAULT_LANGUAGE


def detect_explicit_language(text: str) -> Optional[str]:
    """Return the language the user explicitly asked for, if any."""
    for pattern, code in EXPLICIT_PATTERNS:
        if pattern.search(text or ""):
            return code
    return None


def resolve_language(text: str, client_lang: Optional[str] = None) -> str:
    """Resolve the reply language for a message."""
    if client_lang and client_lang != AUTO_LANGUAGE:
        if client_lang in LANG_NAMES:
            return client_lang
        logger.debug(f"Unsupported client language {client_lang!r}, detecting instead")

    keyword = detect_explicit_language(text)
    if keyword:
        logger.debug(f"Explicit language request detected: {keyword}")
        return keyword

    return detect_language_from_script(text)


def language_name(code: str) -> str:
    """English name of a language code."""
    return LANG_NAMES.get(code, LANG_NAMES[DEFAULT_LANGUAGE])


def is_english(code: str) -> bool:
    return code.split("-")[0].lower() == "en"
