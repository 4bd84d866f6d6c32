"""
Token helpers shared by the value parsers

All helpers are fail-soft: they return None instead of raising.
"""

import math
from typing import List, Optional, Tuple


def parse_float(token: str) -> Optional[float]:
    """
    Parse a single numeric token

    Accepts the forms found in effect files ("1500", "-10.5", ".4", "1e3").
    Returns None for anything else, including empty strings and literals
    too large for a float ("1e400"); a spelled-out "inf" is kept.
    """
    token = token.strip()
    if not token or '_' in token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if math.isinf(value) and 'inf' not in token.lower():
        return None
    return value


def parse_floats(tokens: List[str]) -> Optional[List[float]]:
    """Parse every token, or None if any of them fails"""
    values = []
    for token in tokens:
        value = parse_float(token)
        if value is None:
            return None
        values.append(value)
    return values


def split_pair(token: str) -> Optional[Tuple[float, float]]:
    """Parse "a,b" into two floats; exactly one comma is required"""
    parts = token.split(',')
    if len(parts) != 2:
        return None
    first = parse_float(parts[0])
    second = parse_float(parts[1])
    if first is None or second is None:
        return None
    return first, second


def is_bracketed(text: str) -> bool:
    return text.startswith('[') and text.endswith(']')


def bracket_fields(text: str) -> List[str]:
    """Whitespace fields inside one "[...]" group (one bracket stripped per side)"""
    inner = text.strip()
    if inner.startswith('['):
        inner = inner[1:]
    if inner.endswith(']'):
        inner = inner[:-1]
    return inner.split()
