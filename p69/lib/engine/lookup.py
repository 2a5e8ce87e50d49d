"""
Key path lookup across ordered token maps.

Each map is walked in turn. The first map holding the complete path wins,
whatever kind of value it holds. A map that only holds part of the path is
skipped in favour of the next one.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Final, Optional

from p69.lib.engine.errors import ResolutionError
from p69.models.dataModel import TokenMap, TokenValue

_MISSING: Final[object] = object()


def path_walk(token_map: TokenMap, path: Sequence[str]) -> Any:
    """Follow `path` through nested maps; returns `_MISSING` on failure."""
    current: Any = token_map
    for segment in path:
        if not isinstance(current, Mapping) or segment not in current:
            return _MISSING
        current = current[segment]
    return current


def path_lookup(
    token_maps: Sequence[TokenMap], path: Sequence[str]
) -> Optional[TokenValue]:
    """Find the value for a key path.

    Args:
        token_maps: Token maps in precedence order
        path: Key path segments

    Returns:
        The tagged value from the first map holding the full path, or None
        when no map does. A stored `None` comes back as a literal value.

    Raises:
        ResolutionError: If a token map raises while being read
    """
    for token_map in token_maps:
        try:
            found: Any = path_walk(token_map, path)
        except Exception as e:
            raise ResolutionError(
                f"Token '{'.'.join(path)}' lookup failed: {e}"
            ) from e
        if found is not _MISSING:
            return TokenValue.of(found)
    return None
