"""Constants for catalog scanning, rewriting and accounting."""

# Plural-Forms expressions per language, following the GNU gettext manual:
# https://www.gnu.org/software/gettext/manual/html_node/Plural-forms.html
# Keys are base languages or full locales; full locales win on lookup.
_ONE_FORM = "nplurals=1; plural=0;"
_TWO_FORMS = "nplurals=2; plural=(n != 1);"
_TWO_FORMS_ZERO_SINGULAR = "nplurals=2; plural=(n > 1);"
_EAST_SLAVIC = (
    "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && "
    "(n%100<10 || n%100>=20) ? 1 : 2);"
)

PLURAL_FORMS = {
    # nplurals=1
    "ja": _ONE_FORM,
    "ko": _ONE_FORM,
    "zh": _ONE_FORM,
    "th": _ONE_FORM,
    "vi": _ONE_FORM,
    "id": _ONE_FORM,
    "ms": _ONE_FORM,
    "km": _ONE_FORM,
    # nplurals=2, plural=(n != 1)
    "en": _TWO_FORMS,
    "es": _TWO_FORMS,
    "de": _TWO_FORMS,
    "el": _TWO_FORMS,
    "it": _TWO_FORMS,
    "pt": _TWO_FORMS,
    "nl": _TWO_FORMS,
    "sv": _TWO_FORMS,
    "da": _TWO_FORMS,
    "nb": _TWO_FORMS,
    "nn": _TWO_FORMS,
    "fi": _TWO_FORMS,
    "et": _TWO_FORMS,
    "he": _TWO_FORMS,
    "hi": _TWO_FORMS,
    "hu": _TWO_FORMS,
    "bg": _TWO_FORMS,
    "ca": _TWO_FORMS,
    "eu": _TWO_FORMS,
    "gl": _TWO_FORMS,
    "sq": _TWO_FORMS,
    "af": _TWO_FORMS,
    "tr": _TWO_FORMS,
    # nplurals=2, plural=(n > 1)
    "fr": _TWO_FORMS_ZERO_SINGULAR,
    "pt_BR": _TWO_FORMS_ZERO_SINGULAR,
    "br": _TWO_FORMS_ZERO_SINGULAR,
    "am": _TWO_FORMS_ZERO_SINGULAR,
    "fa": "nplurals=2; plural=(n==0 || n==1 ? 0 : 1);",
    # nplurals=3
    "ru": _EAST_SLAVIC,
    "uk": _EAST_SLAVIC,
    "be": _EAST_SLAVIC,
    "sr": _EAST_SLAVIC,
    "hr": _EAST_SLAVIC,
    "bs": _EAST_SLAVIC,
    "pl": (
        "nplurals=3; plural=(n==1 ? 0 : n%10>=2 && n%10<=4 && "
        "(n%100<10 || n%100>=20) ? 1 : 2);"
    ),
    "cs": "nplurals=3; plural=(n==1 ? 0 : (n>=2 && n<=4) ? 1 : 2);",
    "sk": "nplurals=3; plural=(n==1 ? 0 : (n>=2 && n<=4) ? 1 : 2);",
    "lt": (
        "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : n%10>=2 && "
        "(n%100<10 || n%100>=20) ? 1 : 2);"
    ),
    "lv": "nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : n != 0 ? 1 : 2);",
    "ro": (
        "nplurals=3; plural=(n==1 ? 0 : (n==0 || (n%100 > 0 && n%100 < 20)) ? 1 : 2);"
    ),
    # nplurals=4
    "sl": (
        "nplurals=4; plural=(n%100==1 ? 0 : n%100==2 ? 1 : "
        "n%100==3 || n%100==4 ? 2 : 3);"
    ),
    "cy": "nplurals=4; plural=(n==1 ? 0 : n==2 ? 1 : (n==8 || n==11) ? 2 : 3);",
    # nplurals=5
    "ga": "nplurals=5; plural=(n==1 ? 0 : n==2 ? 1 : (n>2 && n<7) ? 2 : (n>6 && n<11) ? 3 : 4);",  # noqa: E501
    # nplurals=6
    "ar": (
        "nplurals=6; plural=(n==0 ? 0 : n==1 ? 1 : n==2 ? 2 : n%100>=3 && "
        "n%100<=10 ? 3 : n%100>=11 && n%100<=99 ? 4 : 5);"
    ),
}

# Used when a locale is missing from the plural forms table
DEFAULT_PLURAL_FORM = _TWO_FORMS

# Plural entries always get at least this many msgstr[n] slots
MIN_PLURAL_SLOTS = 2

# Locale code -> display name used in prompts and in the header comment
LANGUAGE_DISPLAY_NAMES = {
    "ar": "Arabic",
    "bg_BG": "Bulgarian",
    "ca": "Catalan",
    "cs_CZ": "Czech",
    "da_DK": "Danish",
    "de_DE": "German",
    "de_CH": "German (Switzerland)",
    "el": "Greek",
    "en_GB": "English (UK)",
    "es_ES": "Spanish (Spain)",
    "es_MX": "Spanish (Mexico)",
    "fi": "Finnish",
    "fr_FR": "French (France)",
    "fr_CA": "French (Canada)",
    "fr_BE": "French (Belgium)",
    "he_IL": "Hebrew",
    "hi_IN": "Hindi",
    "hu_HU": "Hungarian",
    "id_ID": "Indonesian",
    "it_IT": "Italian",
    "ja": "Japanese",
    "ko_KR": "Korean",
    "nb_NO": "Norwegian (Bokmål)",
    "nl_NL": "Dutch",
    "pl_PL": "Polish",
    "pt_BR": "Portuguese (Brazil)",
    "pt_PT": "Portuguese (Portugal)",
    "ro_RO": "Romanian",
    "ru_RU": "Russian",
    "sk_SK": "Slovak",
    "sv_SE": "Swedish",
    "th": "Thai",
    "tr_TR": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh_CN": "Chinese (China)",
    "zh_TW": "Chinese (Taiwan)",
}

# Metadata markers of WordPress-style boilerplate entries. An entry carrying
# one of these is passed through untranslated.
SKIP_TRANSLATION_SECTIONS = [
    "#. Plugin URI of the plugin",
    "#. Author of the plugin",
    "#. Author URI of the plugin",
    "# Copyright (C) ",
    "# This file is distributed under the same license as",
    "#. Plugin Name of the plugin",
    "#. Description of the plugin",
]

# Extracted comment kept on translated plural entries
TRANSLATORS_COMMENT_PREFIX = "#. translators"
REFERENCE_COMMENT_PREFIX = "#:"

# PO header metadata
PO_HEADER_MIME_VERSION = "1.0"
PO_HEADER_CONTENT_TYPE = "text/plain; charset=UTF-8"
PO_HEADER_CONTENT_TRANSFER_ENCODING = "8bit"
PO_HEADER_GENERATOR = "Translation Generator/1.0.0"
PO_HEADER_PROJECT_PREFIX = "Plugins - "
PO_REVISION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S+0000"

# Output file extensions
PO_FILE_EXTENSION = ".po"
POT_FILE_EXTENSION = ".pot"
MO_FILE_EXTENSION = ".mo"

# Batching
DEFAULT_BATCH_SIZE = 10

# Cost estimate in USD per one million tokens
DEFAULT_INPUT_COST_PER_MILLION_TOKENS = 5.00
DEFAULT_OUTPUT_COST_PER_MILLION_TOKENS = 15.00
TOKENS_PER_MILLION = 1_000_000
