"""
Format expressions - title formats such as ``"CLM - {content}"``.

A format is literal text around one or more ``{name}`` placeholders. Compiling
it yields a matcher that recognises titles produced from the format and pulls
out the text bound to the first placeholder.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from discourse_graph.ir.errors import InvalidFormat

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{[a-zA-Z]+\}")


@dataclass(frozen=True)
class FormatMatcher:
    format: str
    pattern: re.Pattern
    prefix: str
    suffix: str

    def match(self, title: str) -> Optional[str]:
        """Return the raw text bound to the first placeholder, or None."""
        m = self.pattern.match(title)
        if not m:
            return None
        return m.group(1)

    def render(self, content: str) -> str:
        return f"{self.prefix}{content}{self.suffix}"


def compile_format(format: str) -> FormatMatcher:
    """
    Compile `format` into a FormatMatcher.

    Raises InvalidFormat when the format is empty or has no placeholder.
    """
    if not format:
        raise InvalidFormat(format, "Format cannot be empty")

    placeholders = list(PLACEHOLDER_RE.finditer(format))
    if not placeholders:
        raise InvalidFormat(format, "Format must contain at least one variable in {varName} format")

    parts = []
    cursor = 0
    for placeholder in placeholders:
        parts.append(re.escape(format[cursor:placeholder.start()]))
        parts.append("(.*?)")
        cursor = placeholder.end()
    parts.append(re.escape(format[cursor:]))
    pattern = re.compile("^" + "".join(parts) + "$", re.DOTALL)

    first = placeholders[0]
    prefix = format[:first.start()]
    # Any further placeholders render empty.
    suffix = PLACEHOLDER_RE.sub("", format[first.end():])
    return FormatMatcher(format=format, pattern=pattern, prefix=prefix, suffix=suffix)


def extract_content_from_title(format: str, title: str) -> str:
    """
    Extract the content part of `title` according to `format`.

    NEVER throws: an empty format, a format that does not compile, a title
    that does not match or an empty capture all return `title` unchanged.
    """
    if not format:
        return title

    try:
        matcher = compile_format(format)
    except InvalidFormat as e:
        logger.debug("[Format] cannot compile %r: %s", format, e.message)
        return title

    content = matcher.match(title)
    if content is None:
        return title
    return content.strip() or title


def format_node_name(text: str, format: str) -> Optional[str]:
    """
    Build a node title by placing `text` in the format's first placeholder.

    Newlines inside `text` collapse to single spaces. Returns None when the
    format does not compile.
    """
    normalized = re.sub(r"\s*\n\s*", " ", text).strip()
    try:
        matcher = compile_format(format)
    except InvalidFormat:
        return None
    return matcher.render(normalized)
