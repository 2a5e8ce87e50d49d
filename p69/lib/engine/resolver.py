"""
Resolution of looked up token values.

Callable values are invoked with the token's arguments; literal values are
used as they are. Resolved values are then written out as text.
"""

from collections.abc import Mapping
from typing import Any, Optional

from p69.lib.engine.errors import ResolutionError
from p69.models.dataModel import TokenValue, ValueKind


def value_resolve(
    value: TokenValue, args: Optional[tuple[Any, ...]], name: str = "value"
) -> Any:
    """Produce the final value for a token.

    Args:
        value: Tagged value found by lookup
        args: Arguments written in the token, or None if it had no list
        name: Token path, used in error messages

    Returns:
        The callable's result, or the literal/map unchanged

    Raises:
        ResolutionError: If the callable raises, or if arguments were given
            to a value that is not callable
    """
    if value.kind is ValueKind.CALLABLE:
        try:
            return value.value(*(args or ()))
        except Exception as e:
            raise ResolutionError(f"Token '{name}' failed: {e}") from e

    if args is not None:
        raise ResolutionError(
            f"Token '{name}' is not callable but was given arguments {list(args)}"
        )

    return value.value


def value_stringify(value: Any, name: str = "value") -> str:
    """Write a resolved value as text.

    Booleans are written in lowercase and integral floats without a
    fractional part, so `2.0` becomes `2`.

    Raises:
        ResolutionError: If the value is a map
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        raise ResolutionError(f"Token '{name}' refers to a map, not a value")
    try:
        return str(value)
    except Exception as e:
        raise ResolutionError(f"Token '{name}' cannot be written as text: {e}") from e


def suffix_append(value: Any, suffix: str, name: str = "value") -> Optional[str]:
    """Append the token suffix to a resolved value.

    `None` is returned unchanged so absent values never gain a suffix.
    """
    if value is None:
        return None
    return value_stringify(value, name) + suffix
