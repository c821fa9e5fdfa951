"""ISO 639-1 language table used to normalize language fields.

Records in the store encode languages three ways: as bare codes (``"de"``), as
``"Name (code)"`` labels (``"German (de)"``), or as display names
(``"German"``). This table backs all three lookups.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional


@dataclass(frozen=True)
class Language:
    """A language with its ISO 639-1 code and English display name."""

    code: str
    name: str


LANGUAGES: Dict[str, str] = {
    "af": "Afrikaans",
    "am": "Amharic",
    "ar": "Arabic",
    "az": "Azerbaijani",
    "be": "Belarusian",
    "bg": "Bulgarian",
    "bn": "Bengali",
    "bs": "Bosnian",
    "ca": "Catalan",
    "cs": "Czech",
    "cy": "Welsh",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "eo": "Esperanto",
    "es": "Spanish",
    "et": "Estonian",
    "eu": "Basque",
    "fa": "Persian",
    "fi": "Finnish",
    "fr": "French",
    "ga": "Irish",
    "gl": "Galician",
    "gu": "Gujarati",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "hy": "Armenian",
    "id": "Indonesian",
    "is": "Icelandic",
    "it": "Italian",
    "ja": "Japanese",
    "ka": "Georgian",
    "kk": "Kazakh",
    "km": "Khmer",
    "kn": "Kannada",
    "ko": "Korean",
    "lo": "Lao",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "mk": "Macedonian",
    "ml": "Malayalam",
    "mn": "Mongolian",
    "mr": "Marathi",
    "ms": "Malay",
    "mt": "Maltese",
    "my": "Burmese",
    "ne": "Nepali",
    "nl": "Dutch",
    "no": "Norwegian",
    "pa": "Punjabi",
    "pl": "Polish",
    "ps": "Pashto",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "si": "Sinhala",
    "sk": "Slovak",
    "sl": "Slovenian",
    "so": "Somali",
    "sq": "Albanian",
    "sr": "Serbian",
    "sv": "Swedish",
    "sw": "Swahili",
    "ta": "Tamil",
    "te": "Telugu",
    "th": "Thai",
    "tl": "Tagalog",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ur": "Urdu",
    "uz": "Uzbek",
    "vi": "Vietnamese",
    "yo": "Yoruba",
    "zh": "Chinese",
    "zu": "Zulu",
}

LANGUAGE_CODES: FrozenSet[str] = frozenset(LANGUAGES)

_LANGUAGES_BY_NAME: Dict[str, Language] = {
    name: Language(code=code, name=name)
    for code, name in LANGUAGES.items()
}


def get_language_by_name(name: str) -> Optional[Language]:
    """Look up a language by its English display name.

    The match is exact and case-sensitive (``"German"`` matches, ``"german"``
    does not).

    Args:
        name: Display name to look up

    Returns:
        Matching Language, or None if the name is unknown
    """
    if not isinstance(name, str):
        return None
    return _LANGUAGES_BY_NAME.get(name)


def get_display_name_from_code(code: str) -> str:
    """Return the English display name for a code, or the upper-cased code."""
    return LANGUAGES.get(code.lower(), code.upper())
