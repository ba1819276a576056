"""Path parameter decoding.

Captured segments arrive percent-encoded; each one is decoded exactly
once, by the route that captured it.
"""

import re
from urllib.parse import unquote

from switchyard.errors import BadRequest

# A "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_param(value: str) -> str:
    """Percent-decode a captured segment.

    ``+`` is left alone (it only means space in form bodies).
    Raises ``BadRequest`` for a stray ``%`` or bytes that are not UTF-8.
    """
    if "%" not in value:
        return value
    if _MALFORMED_ESCAPE.search(value):
        msg = f"Failed to decode param {value!r}"
        raise BadRequest(msg)
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        msg = f"Failed to decode param {value!r}"
        raise BadRequest(msg) from None
