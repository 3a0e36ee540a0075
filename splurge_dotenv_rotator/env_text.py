"""In-place rewriting of env text.

Both operations work on raw text and leave every byte they do not target
untouched: comments, blank lines, ordering, quoting and line endings.
"""

from splurge_dotenv_rotator.env_parser import iter_assignments

_NEEDS_QUOTES = set(" \t\r\n#'\"`\\")


def replace(src: str, name: str, value: str, old_value: str | None = None) -> str:
    """Replace the value of assignments of ``name`` in ``src``.

    Every assignment of ``name`` is rewritten unless ``old_value`` is given,
    in which case only assignments currently holding ``old_value`` are. The
    original quote style and any trailing comment are kept. An unquoted value
    stays unquoted unless the new value needs quoting.

    Args:
        src: Raw env text
        name: Variable name whose value is replaced
        value: New value
        old_value: Only replace assignments whose parsed value equals this

    Returns:
        The rewritten text, or ``src`` unchanged when nothing matched

    Raises:
        ParseError: If ``src`` cannot be parsed
    """
    pieces: list[str] = []
    last = 0
    for assignment in iter_assignments(src):
        if assignment.name != name:
            continue
        if old_value is not None and assignment.value != old_value:
            continue
        pieces.append(src[last:assignment.value_start])
        pieces.append(_format_value(value, assignment.quote))
        last = assignment.value_end

    if not pieces:
        return src

    pieces.append(src[last:])
    return "".join(pieces)


def append(src: str, name: str, value: str) -> str:
    """Append a ``NAME="value"`` line to ``src``.

    Args:
        src: Raw env text (may be empty)
        name: Variable name
        value: Value to assign

    Returns:
        The text with one new assignment line
    """
    newline = "\r\n" if "\r\n" in src else "\n"
    if src and not src.endswith("\n"):
        src += newline
    line = name + "=" + _format_value(value, '"')
    return f"{src}{line}{newline}"


def _format_value(value: str, quote: str | None) -> str:
    if quote is None:
        if not (_NEEDS_QUOTES & set(value)):
            return value
        quote = '"'

    if quote == "'" and not (set("'\\\n") & set(value)):
        return f"'{value}'"

    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'
