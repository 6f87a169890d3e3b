"""
textkit package.

Unicode-aware text helpers for generating identifiers, slugs and option
keys: ASCII transliteration, slugging, memoized case conversion, pattern
matching, truncation and secure random strings.

textkit never configures handlers itself; the host application decides
where its log records go.
"""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
