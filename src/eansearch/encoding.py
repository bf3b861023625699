"""Query string helpers for the ean-search.org API."""

import re
from enum import Enum
from typing import Iterable
from urllib.parse import quote

_WHITESPACE = re.compile(r"\s")


def urlencode(text: str, plus_spaces: bool = False) -> str:
    """
    Percent-encode a query parameter value.

    Letters, digits and ``-_.~`` pass through, every other byte of the UTF-8
    encoding becomes ``%XX``.

    Args:
        text: The value to encode
        plus_spaces: Legacy mode that only turns whitespace into ``+``

    Returns:
        The encoded value

    Example:
        >>> urlencode("Bananaboat")
        'Bananaboat'
        >>> urlencode("iPhone Max")
        'iPhone%20Max'
        >>> urlencode("iPhone Max", plus_spaces=True)
        'iPhone+Max'
    """
    if plus_spaces:
        return _WHITESPACE.sub("+", text)
    try:
        # Undecodable argv bytes come back as lone surrogates
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "surrogatepass")
    return quote(raw, safe="")


def build_query(pairs: Iterable[tuple[str, object]]) -> str:
    """
    Join already encoded ``(key, value)`` pairs into ``k=v&k=v``.

    Enum members are written as their value, so ``Language.ANY`` becomes 99.

    Example:
        >>> build_query([("op", "product-search"), ("page", 0)])
        'op=product-search&page=0'
    """
    parts = []
    for key, value in pairs:
        if isinstance(value, Enum):
            value = value.value
        parts.append(f"{key}={value}")
    return "&".join(parts)
