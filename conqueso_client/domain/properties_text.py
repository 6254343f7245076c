"""Parser for flat Java-properties style `key=value` documents.

The Conqueso server renders the latest property snapshot in this format and
override files use it as well, so both paths share one parser.
"""

from __future__ import annotations

_PROPERTIES_COMMENT_PREFIXES = ("#", "!")
_PROPERTIES_SEPARATORS = frozenset({"=", ":"})
_PROPERTIES_WHITESPACE = frozenset({" ", "\t", "\f"})
_PROPERTIES_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def domain_parse_properties_text(text: str) -> dict[str, str]:
    """Parse properties text into an ordered key/value mapping.

    Args:
        text: Document text.

    Returns:
        dict[str, str]: Parsed entries, later duplicate keys winning.

    Raises:
        ValueError: Raised when a `\\u` escape is malformed.
    """

    result: dict[str, str] = {}
    for logical_line in _domain_properties_logical_lines(text):
        key, value = _domain_properties_split_entry(logical_line)
        result[_domain_properties_unescape(key)] = _domain_properties_unescape(value)
    return result


def _domain_properties_logical_lines(text: str) -> list[str]:
    logical_lines: list[str] = []
    pending = ""
    continuing = False
    for raw_line in text.splitlines():
        line = raw_line.lstrip(" \t\f")
        if not continuing and (not line or line.startswith(_PROPERTIES_COMMENT_PREFIXES)):
            continue

        trailing_backslashes = len(line) - len(line.rstrip("\\"))
        if trailing_backslashes % 2 == 1:
            pending += line[:-1]
            continuing = True
            continue

        logical_lines.append(pending + line)
        pending = ""
        continuing = False

    if continuing and pending:
        logical_lines.append(pending)
    return logical_lines


def _domain_properties_split_entry(line: str) -> tuple[str, str]:
    index = 0
    length = len(line)
    while index < length:
        character = line[index]
        if character == "\\":
            index += 2
            continue
        if character in _PROPERTIES_SEPARATORS or character in _PROPERTIES_WHITESPACE:
            break
        index += 1

    key = line[:index]
    remainder = line[index:].lstrip(" \t\f")
    if remainder[:1] in _PROPERTIES_SEPARATORS:
        remainder = remainder[1:].lstrip(" \t\f")
    return key, remainder


def _domain_properties_unescape(value: str) -> str:
    if "\\" not in value:
        return value

    characters: list[str] = []
    index = 0
    length = len(value)
    while index < length:
        character = value[index]
        if character != "\\" or index + 1 >= length:
            characters.append(character)
            index += 1
            continue

        escaped = value[index + 1]
        if escaped == "u":
            code_point = value[index + 2 : index + 6]
            if len(code_point) != 4:
                raise ValueError(f"Malformed \\u escape in properties text: {value!r}")
            characters.append(chr(int(code_point, 16)))
            index += 6
            continue

        characters.append(_PROPERTIES_ESCAPES.get(escaped, escaped))
        index += 2
    return "".join(characters)
