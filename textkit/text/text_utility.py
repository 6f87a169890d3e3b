"""
Text utility service for identifiers, slugs and option keys.

Provides ASCII folding, slug generation, case conversion with memoization,
substring predicates, length-bounded transforms and secure random strings.
Every operation is a pure function of its input, apart from the three
conversion caches owned by each TextUtility instance.
"""

import base64
import hmac
import random as _random
import re
import secrets
import threading
import unicodedata
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, Union

from ..core import get_config, get_logger, TextConfig, ConfigurationError, EntropyUnavailableError
from .cache import ConversionCache
from .charmap import TRANSLITERATION_TABLE, iter_replacements

logger = get_logger(__name__)

_text_utility: Optional["TextUtility"] = None
_text_utility_lock = threading.Lock()

TextInput = Union[str, bytes]
Needles = Union[TextInput, Iterable[TextInput]]

QUICK_RANDOM_POOL = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Anything outside printable ASCII is dropped after transliteration
NON_PRINTABLE_ASCII = re.compile(r"[^\x20-\x7E]")

# Start of a word for studly caps: string start or after whitespace
WORD_START = re.compile(r"(^|[ \t\r\n\f\v])(\S)")

# A word for title case: letters/digits, with inner apostrophes
TITLE_WORD = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")

WHITESPACE = re.compile(r"\s+")


def _text(value: TextInput) -> str:
    """Decode bytes as UTF-8, replacing invalid sequences."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return value


def _as_needles(needles: Needles) -> List[str]:
    """Accept a single needle or an iterable of needles."""
    if isinstance(needles, (str, bytes, bytearray)):
        return [_text(needles)]
    return [_text(needle) for needle in needles]


def _char_width(char: str) -> int:
    """Display width of a single code point: 2 for wide and fullwidth."""
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


class TextUtility:
    """
    Stateless text transforms plus per-instance conversion caches.

    The transliteration table is injected read-only; the snake, camel and
    studly caches are owned by the instance and only ever memoize, so a
    cached value always equals what a fresh computation would return.
    """

    def __init__(
        self,
        config: TextConfig = None,
        table: Mapping[str, Tuple[str, ...]] = TRANSLITERATION_TABLE,
        random_source: Callable[[int], bytes] = secrets.token_bytes
    ):
        """
        Initialize the service.

        Args:
            config: Defaults for omitted arguments (separator, limits, ...).
            table: Transliteration table, applied in its iteration order.
            random_source: Callable returning n cryptographically secure bytes.
        """
        self.config = config or TextConfig()
        self.table = table
        self._random_source = random_source

        self.snake_cache = ConversionCache("snake")
        self.camel_cache = ConversionCache("camel")
        self.studly_cache = ConversionCache("studly")

    # ASCII folding and slugs

    def ascii(self, value: TextInput) -> str:
        """
        Transliterate a UTF-8 value to printable ASCII.

        Every variant in the table is replaced by its ASCII key, in table
        order; whatever is left outside 0x20-0x7E is removed.

        Args:
            value: Text to fold.

        Returns:
            Printable ASCII string.
        """
        value = _text(value)

        for variant, key in iter_replacements(self.table):
            if variant in value:
                value = value.replace(variant, key)

        return NON_PRINTABLE_ASCII.sub("", value)

    def slug(self, title: TextInput, separator: str = None) -> str:
        """
        Generate a URL friendly "slug" from a given string.

        Args:
            title: Arbitrary text.
            separator: Word separator, defaults to the configured one ("-").

        Returns:
            Lower-case slug, possibly empty when nothing survives folding.
        """
        if separator is None:
            separator = self.config.slug_separator

        title = self.ascii(title)

        # Dashes and underscores both become the separator
        title = re.sub(r"[-_]+", lambda m: separator, title)

        title = "".join(
            char for char in title.lower()
            if char in separator or char.isalnum() or char.isspace()
        )

        title = re.sub(
            "[" + re.escape(separator) + r"\s]+",
            lambda m: separator,
            title
        )

        if separator:
            title = title.strip(separator)

        return title

    # Case conversion

    def lower(self, value: TextInput) -> str:
        """Convert the given string to lower-case."""
        return _text(value).lower()

    def upper(self, value: TextInput) -> str:
        """Convert the given string to upper-case."""
        return _text(value).upper()

    def title(self, value: TextInput) -> str:
        """
        Convert the given string to title case.

        The first letter of every word is title-cased and the rest of the
        word lower-cased. Apostrophes inside a word do not start a new one.
        """
        return TITLE_WORD.sub(
            lambda m: m.group(0)[0].title() + m.group(0)[1:].lower(),
            _text(value)
        )

    def ucfirst(self, value: TextInput) -> str:
        """Make a string's first character uppercase."""
        value = _text(value)
        return self.upper(value[:1]) + value[1:]

    def lcfirst(self, value: TextInput) -> str:
        """Make a string's first character lowercase."""
        value = _text(value)
        return self.lower(value[:1]) + value[1:]

    def studly(self, value: TextInput) -> str:
        """
        Convert a value to studly caps case.

        Dashes and underscores act as word breaks; the first character of
        each word is upper-cased and the spaces are removed.
        """
        value = _text(value)
        return self.studly_cache.get_or_compute(value, lambda: self._studly(value))

    def _studly(self, value: str) -> str:
        words = value.replace("-", " ").replace("_", " ")
        words = WORD_START.sub(lambda m: m.group(1) + m.group(2).title(), words)
        return words.replace(" ", "")

    def camel(self, value: TextInput) -> str:
        """Convert a value to camel case."""
        value = _text(value)
        return self.camel_cache.get_or_compute(
            value,
            lambda: self.lcfirst(self.studly(value))
        )

    def snake(self, value: TextInput, delimiter: str = None) -> str:
        """
        Convert a string to snake case.

        Input made only of lower-case characters is returned as-is.
        Otherwise whitespace is removed, the delimiter is inserted before
        every upper-case character that has a predecessor, and the result
        is lower-cased. Runs of capitals are split letter by letter.

        Args:
            value: Text to convert.
            delimiter: Inserted at case transitions, defaults to "_".

        Returns:
            Snake-cased string.
        """
        if delimiter is None:
            delimiter = self.config.snake_delimiter

        value = _text(value)

        return self.snake_cache.get_or_compute(
            (value, delimiter),
            lambda: self._snake(value, delimiter)
        )

    def _snake(self, value: str, delimiter: str) -> str:
        if value and all(char.islower() for char in value):
            return value

        value = WHITESPACE.sub("", value)

        parts = []
        for index, char in enumerate(value):
            parts.append(char)
            if index + 1 < len(value) and value[index + 1].isupper():
                parts.append(delimiter)

        return self.lower("".join(parts))

    # Predicates and search

    def contains(self, haystack: TextInput, needles: Needles) -> bool:
        """Determine if a given string contains any of the given substrings."""
        haystack = _text(haystack)
        return any(needle and needle in haystack for needle in _as_needles(needles))

    def starts_with(self, haystack: TextInput, needles: Needles) -> bool:
        """Determine if a given string starts with any of the given substrings."""
        haystack = _text(haystack)
        return any(needle and haystack.startswith(needle) for needle in _as_needles(needles))

    def ends_with(self, haystack: TextInput, needles: Needles) -> bool:
        """Determine if a given string ends with any of the given substrings."""
        haystack = _text(haystack)
        return any(needle and haystack.endswith(needle) for needle in _as_needles(needles))

    def is_match(self, pattern: TextInput, value: TextInput) -> bool:
        """
        Determine if a given string matches a given pattern.

        Asterisks are wildcards matching zero or more characters, newlines
        included, so "library/*" matches anything under "library/". The
        whole value must be consumed. Matching is a single left-to-right
        scan over the literal segments between asterisks.

        Args:
            pattern: Literal text or glob-style pattern.
            value: Text to test.

        Returns:
            True on an exact or wildcard match.
        """
        pattern = _text(pattern)
        value = _text(value)

        if pattern == value:
            return True

        segments = pattern.split("*")
        if len(segments) == 1:
            return False

        head, middle, tail = segments[0], segments[1:-1], segments[-1]

        if len(head) + len(tail) > len(value):
            return False
        if not value.startswith(head) or not value.endswith(tail):
            return False

        position = len(head)
        end = len(value) - len(tail)

        for segment in middle:
            if not segment:
                continue
            found = value.find(segment, position, end)
            if found == -1:
                return False
            position = found + len(segment)

        return True

    def finish(self, value: TextInput, cap: TextInput) -> str:
        """Cap a string with a single instance of a given value."""
        value = _text(value)
        cap = _text(cap)

        if not cap:
            return value

        return re.sub("(?:" + re.escape(cap) + r")+\Z", "", value) + cap

    def replace_first(self, search: TextInput, replace: TextInput, subject: TextInput) -> str:
        """Replace the first occurrence of a given value in the string."""
        search, replace, subject = _text(search), _text(replace), _text(subject)

        if not search:
            return subject

        return subject.replace(search, replace, 1)

    def replace_last(self, search: TextInput, replace: TextInput, subject: TextInput) -> str:
        """Replace the last occurrence of a given value in the string."""
        search, replace, subject = _text(search), _text(replace), _text(subject)

        position = subject.rfind(search) if search else -1
        if position == -1:
            return subject

        return subject[:position] + replace + subject[position + len(search):]

    def parse_callback(self, callback: TextInput, default: str = "") -> List[str]:
        """
        Parse a "Class@method" style callback into class and method.

        Returns:
            Two-element list; the method part is default when no "@" is present.
        """
        callback = _text(callback)

        if self.contains(callback, "@"):
            return callback.split("@", 1)

        return [callback, default]

    # Length-bounded transforms

    def length(self, value: TextInput) -> int:
        """Return the number of code points in the given string."""
        return len(_text(value))

    def width(self, value: TextInput) -> int:
        """Return the display width, counting wide and fullwidth characters as 2."""
        return sum(_char_width(char) for char in _text(value))

    def substr(self, value: TextInput, start: int, length: int = None) -> str:
        """
        Return the portion of string specified by start and length.

        A negative start counts from the end of the string. A negative
        length leaves that many characters off the end.
        """
        value = _text(value)

        if start < 0:
            start = max(len(value) + start, 0)

        if length is None:
            return value[start:]

        if length < 0:
            return value[start:length]

        return value[start:start + length]

    def limit(self, value: TextInput, limit: int = None, end: str = None) -> str:
        """
        Limit the display width of a string.

        Args:
            value: Text to truncate.
            limit: Maximum display width before truncation.
            end: Appended after the truncated, right-trimmed text.

        Returns:
            The original value when it fits, otherwise the truncated text.
        """
        if limit is None:
            limit = self.config.limit_length
        if end is None:
            end = self.config.limit_end

        value = _text(value)

        if self.width(value) <= limit:
            return value

        kept = []
        used = 0
        for char in value:
            char_width = _char_width(char)
            if used + char_width > limit:
                break
            kept.append(char)
            used += char_width

        return "".join(kept).rstrip() + end

    def words(self, value: TextInput, words: int = None, end: str = None) -> str:
        """
        Limit the number of words in a string.

        Args:
            value: Text to truncate.
            words: Maximum number of whitespace-delimited words to keep.
            end: Appended after the kept words when anything was cut.

        Returns:
            The original value when nothing needs cutting, otherwise the
            leading words, right-trimmed, followed by end.
        """
        if words is None:
            words = self.config.words_count
        if end is None:
            end = self.config.words_end

        value = _text(value)

        if words < 1:
            return value

        match = re.match(r"\s*(?:\S+\s*){1,%d}" % words, value)

        if not match or len(match.group(0)) == len(value):
            return value

        return match.group(0).rstrip() + end

    # Randomness and comparison

    def random_bytes(self, length: int = 16) -> bytes:
        """
        Generate cryptographically secure random bytes.

        Raises:
            EntropyUnavailableError: If the secure source cannot supply bytes.
        """
        try:
            return self._random_source(length)
        except (OSError, NotImplementedError) as e:
            logger.error(f"Secure random source failed for {length} bytes: {e}")
            raise EntropyUnavailableError(
                f"Secure random source unavailable: {e}",
                requested=length,
                details={"error": str(e)}
            ) from e

    def random(self, length: int = None) -> str:
        """
        Generate a random alpha-numeric string from a secure source.

        Base64 output of secure random bytes is stripped of "/", "+" and "="
        and sampled again until exactly length characters are collected.

        Raises:
            EntropyUnavailableError: If the secure source cannot supply bytes.
        """
        if length is None:
            length = self.config.random_length

        string = ""

        while len(string) < length:
            size = length - len(string)
            encoded = base64.b64encode(self.random_bytes(size)).decode("ascii")
            string += re.sub(r"[/+=]", "", encoded)[:size]

        return string

    def quick_random(self, length: int = 16) -> str:
        """
        Generate a "random" alpha-numeric string.

        Not suitable for secrets: uses the non-cryptographic module RNG.
        """
        if length <= 0:
            return ""

        return "".join(_random.sample(QUICK_RANDOM_POOL * length, length))

    def equals(self, known_string: TextInput, user_input: TextInput) -> bool:
        """
        Compare two strings using a constant-time algorithm.

        Only the length of the known string can leak through timing.
        """
        if isinstance(known_string, str):
            known_string = known_string.encode("utf-8")
        if isinstance(user_input, str):
            user_input = user_input.encode("utf-8")

        return hmac.compare_digest(bytes(known_string), bytes(user_input))

    def cache_stats(self) -> List[dict]:
        """Get statistics for the snake, camel and studly caches."""
        return [
            self.snake_cache.stats(),
            self.camel_cache.stats(),
            self.studly_cache.stats()
        ]


def get_text_utility() -> TextUtility:
    """
    Get the process-wide TextUtility instance.

    Built on first use from the loaded configuration, or from defaults
    when no config file can be found.

    Returns:
        Global TextUtility instance.
    """
    global _text_utility

    if _text_utility is None:
        with _text_utility_lock:
            if _text_utility is None:
                try:
                    text_config = get_config().text
                except ConfigurationError as e:
                    logger.debug(f"Using default text settings: {e.message}")
                    text_config = TextConfig()
                _text_utility = TextUtility(text_config)
                logger.debug(
                    f"TextUtility ready with {len(_text_utility.table)} transliteration keys"
                )

    return _text_utility


def reset_text_utility() -> None:
    """Discard the process-wide instance so the next call rebuilds it."""
    global _text_utility
    with _text_utility_lock:
        _text_utility = None


if __name__ == "__main__":
    from ..core import setup_logging_from_config
    setup_logging_from_config()

    text = get_text_utility()

    print("=== ascii / slug ===")
    print(text.ascii("Crème brûlée à São Paulo"))
    print(text.slug("Hello World!"))
    print(text.slug("Ελληνικά κείμενα", "_"))

    print("\n=== case ===")
    print(text.studly("foo_bar-baz"))
    print(text.camel("foo_bar-baz"))
    print(text.snake("fooBarBaz"))

    print("\n=== limits ===")
    print(text.limit("The quick brown fox", 9))
    print(text.words("The quick brown fox", 2))

    print("\n=== random ===")
    print(text.random(32))
    print(text.cache_stats())
