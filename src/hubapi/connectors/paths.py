"""Path template interpolation.

Templates name their placeholders ``:name``. Matching is by whole token,
so ``:owner`` never consumes the ``:owner_id`` placeholder.
"""

import re
from typing import Any, Dict, Mapping, Set, Tuple

from .base import MissingInterpolation
from .params import convert_value

PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def placeholders(template: str) -> Set[str]:
    """Names of all ``:name`` placeholders in a template."""
    return set(PLACEHOLDER_RE.findall(template))


def references(template: str, name: str) -> bool:
    """Check whether ``template`` contains the ``:name`` placeholder."""
    return name in placeholders(template)


def resolve_path(template: str, params: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """Substitute placeholders from ``params``.

    Args:
        template: Path template, e.g. ``/owners/v2/owners/:owner_id``
        params: Candidate values; not modified

    Returns:
        (resolved path, params left over for the query string). The
        leftover mapping keeps the input order.

    Raises:
        MissingInterpolation: If the resolved path still contains ``:``
    """
    consumed: Set[str] = set()

    def _substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in params:
            return match.group(0)
        consumed.add(name)
        return convert_value(params[name])

    path = PLACEHOLDER_RE.sub(_substitute, template)
    if ":" in path:
        raise MissingInterpolation(f"Interpolation not resolved: {path}")

    remaining = {k: v for k, v in params.items() if k not in consumed}
    return path, remaining
