"""Query-string encoding for request parameters.

Each parameter becomes one or more ``key=value`` fragments. The key
picks the encoding rule, evaluated in a fixed order:

1. range rule: key contains ``range``; value must be a ``Span`` and is
   emitted twice under the same key (begin, then end)
2. batch rule: key starts with ``batch_``; the rest of the key is
   emitted in camelCase (``batch_company_id`` -> ``companyId``)
3. plain rule: key emitted unchanged

Values: ``datetime`` -> integer milliseconds since the Unix epoch,
``bool`` -> ``true``/``false``, ``None`` -> empty, anything else ->
``str()`` percent-encoded for a query string. List and tuple values
expand into one fragment per element under the same key.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from .base import InvalidParameter

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Span:
    """Inclusive (begin, end) range value."""

    begin: Any
    end: Any


def to_millis(value: datetime) -> int:
    """Milliseconds since the epoch, sub-second part dropped. Naive values are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return ((value - EPOCH) // timedelta(seconds=1)) * 1000


def convert_value(value: Any) -> str:
    """Convert a single scalar or timestamp to its query representation."""
    if isinstance(value, datetime):
        return str(to_millis(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return quote_plus(str(value), safe="")


def camelize(name: str) -> str:
    """``company_id`` -> ``companyId``."""
    return re.sub(r"_(.)", lambda m: m.group(1).upper(), name)


# =============================================================================
# Encoding rules
# =============================================================================


def _encode_range(key: str, value: Any) -> Optional[List[str]]:
    if "range" not in key:
        return None
    if not isinstance(value, Span):
        raise InvalidParameter(f"Value for '{key}' must be a range", key=key, value=value)
    return [f"{key}={convert_value(value.begin)}", f"{key}={convert_value(value.end)}"]


def _encode_batch(key: str, value: Any) -> Optional[List[str]]:
    match = re.match(r"^batch_(.*)$", key)
    if not match:
        return None
    return [f"{camelize(match.group(1))}={convert_value(value)}"]


def _encode_plain(key: str, value: Any) -> Optional[List[str]]:
    return [f"{key}={convert_value(value)}"]


ENCODING_RULES: Tuple[Callable[[str, Any], Optional[List[str]]], ...] = (
    _encode_range,
    _encode_batch,
    _encode_plain,
)


def param_fragments(key: str, value: Any) -> List[str]:
    """Encode one key/value pair (sequence values not expanded)."""
    for rule in ENCODING_RULES:
        fragments = rule(key, value)
        if fragments is not None:
            return fragments
    return []


def generate_query(params: Mapping[str, Any]) -> str:
    """Join the fragments of every parameter with ``&``.

    Args:
        params: Ordered mapping of parameter name to value

    Returns:
        Query string without a leading ``?`` (empty for no params)

    Raises:
        InvalidParameter: If a range key holds something other than a Span
    """
    fragments: List[str] = []
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                fragments.extend(param_fragments(key, item))
        else:
            fragments.extend(param_fragments(key, value))
    return "&".join(fragments)
