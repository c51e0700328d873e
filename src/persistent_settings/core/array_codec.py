"""Encode string sequences as a single comma-delimited string.

Array values (string arrays and byte arrays) are stored as one value in
the INI, XML and registry string formats. Items containing a delimiter,
a quote or a line break are quoted CSV-style, with inner quotes doubled:

    >>> encode(["a,b", 'c"d', "e"])
    '"a,b","c""d",e'
    >>> decode('"a,b","c""d",e')
    ['a,b', 'c"d', 'e']
"""

from typing import Iterable, Optional

DELIMITER = ","
QUOTE = '"'
_SPECIAL_CHARS = (DELIMITER, QUOTE, "\r", "\n")


def _needs_quotes(item: str) -> bool:
    return any(char in item for char in _SPECIAL_CHARS)


def _quote(item: str) -> str:
    return QUOTE + item.replace(QUOTE, QUOTE * 2) + QUOTE


def encode(items: Optional[Iterable[str]]) -> str:
    """Represent a sequence of strings as a single string.

    Args:
        items: Strings to encode; None is treated as an empty sequence

    Returns:
        The encoded string ("" for an empty sequence)
    """
    if items is None:
        return ""

    items = list(items)
    parts = []
    for index, item in enumerate(items):
        # A bare empty last item would vanish on decode
        if _needs_quotes(item) or (item == "" and index == len(items) - 1):
            parts.append(_quote(item))
        else:
            parts.append(item)
    return DELIMITER.join(parts)


def decode(value: Optional[str]) -> list[str]:
    """Decode a string created with :func:`encode` back to a list.

    Args:
        value: Encoded string; None or "" decode to an empty list

    Returns:
        List of decoded items
    """
    items: list[str] = []
    if not value:
        return items

    pos = 0
    length = len(value)
    while pos < length:
        if value[pos] == QUOTE:
            # Quoted item: "" inside the quotes is a literal quote
            chars = []
            pos += 1
            while pos < length:
                if value[pos] == QUOTE:
                    pos += 1
                    if pos >= length or value[pos] != QUOTE:
                        break
                chars.append(value[pos])
                pos += 1
            items.append("".join(chars))

            # Anything between the closing quote and the delimiter is dropped
            pos = value.find(DELIMITER, pos)
            if pos == -1:
                pos = length
            pos += 1
        else:
            start = pos
            pos = value.find(DELIMITER, pos)
            if pos == -1:
                pos = length
            items.append(value[start:pos])
            pos += 1
    return items
