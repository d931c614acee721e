"""Regex-based discovery of document links inside raw page text.

The page is scanned line by line rather than parsed as HTML, so links hidden
in inline scripts, JSON blobs or data attributes are found as well as plain
``href`` values.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern

# Characters that can never be part of a matched URL: whitespace, quotes and
# angle brackets bound the link inside surrounding markup.
_URL_CHARS = r"""[^\s"'<>]"""


@lru_cache(maxsize=16)
def link_pattern(extension: str = "pdf") -> Pattern[str]:
    """Return the compiled pattern matching absolute ``.<extension>`` URLs."""
    ext = re.escape(extension.lstrip("."))
    # The trailing lookahead rejects "a.pdfx" and "a.pdf.bak" but still allows
    # a sentence-ending period right after the extension.
    return re.compile(
        rf"https?://{_URL_CHARS}+?\.{ext}(?:\?{_URL_CHARS}*)?(?!\w|\.\w)",
        re.IGNORECASE,
    )


def extract_links(text: str, extension: str = "pdf") -> List[str]:
    """Return the unique ``.<extension>`` URLs in *text*, in first-seen order."""
    pattern = link_pattern(extension)
    seen: set = set()
    links: List[str] = []
    for line in text.split("\n"):
        for match in pattern.findall(line):
            if match not in seen:
                seen.add(match)
                links.append(match)
    return links


def remove_duplicates(items: Iterable[str]) -> List[str]:
    seen: set = set()
    unique: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
