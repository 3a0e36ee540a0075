"""Parser for ``.env`` text.

Parsing is done by python-dotenv. On top of its bindings this module records
where every assignment's value sits in the raw text so that ``env_text`` can
rewrite values in place without touching anything else.
"""

import io
import re
from dataclasses import dataclass
from typing import Iterator

from dotenv.parser import parse_stream

from splurge_dotenv_rotator.exceptions import ParseError

# Everything python-dotenv consumes before a value: whitespace, ``export``,
# the key and the equal sign
_VALUE_PREFIX = re.compile(r"\s*(?:export[^\S\r\n]+)?(?:'[^']+'|[^=\#\s]+)[^\S\r\n]*=[^\S\r\n]*")
_QUOTED_VALUES = {
    "'": re.compile(r"'(?:\\'|[^'])*'"),
    '"': re.compile(r'"(?:\\"|[^"])*"'),
}


@dataclass(frozen=True)
class Assignment:
    """A single ``KEY=value`` assignment located in raw text."""

    name: str
    value: str
    value_start: int  # offset of the raw value (including any opening quote)
    value_end: int  # offset one past the raw value (including any closing quote)
    quote: str | None
    line_number: int


def iter_assignments(text: str) -> Iterator[Assignment]:
    """Yield every assignment in ``text`` in source order.

    Keys declared without ``=`` carry no value and are skipped.

    Raises:
        ParseError: If python-dotenv cannot parse a statement
    """
    offset = 0
    for binding in parse_stream(io.StringIO(text)):
        chunk = binding.original.string
        chunk_start = offset
        offset += len(chunk)

        if binding.error:
            statement_start = chunk_start + len(chunk) - len(chunk.lstrip())
            raise ParseError(
                f"could not parse statement: {chunk.strip()[:40]!r}",
                line_number=_line_number(text, statement_start),
            )

        if binding.key is None or binding.value is None:
            continue

        prefix = _VALUE_PREFIX.match(chunk)
        value_start = chunk_start + prefix.end()
        quote = chunk[prefix.end()] if chunk[prefix.end():prefix.end() + 1] in _QUOTED_VALUES else None

        if quote is None:
            # unquoted values are a prefix of the rest of the line
            value_end = value_start + len(binding.value)
        else:
            value_end = chunk_start + _QUOTED_VALUES[quote].match(chunk, prefix.end()).end()

        yield Assignment(
            name=binding.key,
            value=binding.value,
            value_start=value_start,
            value_end=value_end,
            quote=quote,
            line_number=_line_number(text, value_start),
        )


def parse(text: str) -> dict[str, str]:
    """Parse env text into an ordered mapping of key to value.

    Duplicate keys keep the position of their first occurrence and the value
    of their last.

    Raises:
        ParseError: If the text contains a malformed statement
    """
    parsed: dict[str, str] = {}
    for assignment in iter_assignments(text):
        parsed[assignment.name] = assignment.value
    return parsed


def _line_number(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1
