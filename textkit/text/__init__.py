"""
Text module providing the TextUtility service.

Provides the transliteration table, the conversion caches and the
TextUtility service object built on top of them.
"""

from .charmap import TRANSLITERATION_TABLE, iter_replacements
from .cache import ConversionCache
from .text_utility import TextUtility, get_text_utility, reset_text_utility

__all__ = [
    "TRANSLITERATION_TABLE",
    "iter_replacements",
    "ConversionCache",
    "TextUtility",
    "get_text_utility",
    "reset_text_utility"
]
