"""Errors reported while rewriting tokens."""


class P69Error(Exception):
    """Base class for token rewrite errors."""


class MissingTokenError(P69Error):
    """No token map defines the token's path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Missing token: {path}")
        self.path: str = path


class ResolutionError(P69Error):
    """A token value could not be turned into text.

    Raised when a callable value fails, when arguments are given to a value
    that is not callable, or when the value is not writable as text.
    """
