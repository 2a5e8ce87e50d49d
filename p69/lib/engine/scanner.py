r"""
Token scanner for P69.

Locates every `$` token in a piece of text and records its exact span.

Token syntax:
    $path                     e.g. $color
    $path.to.value            e.g. $color.base
    $path(args)               e.g. $space(2, 'em')
    $path(args)suffix         e.g. $grid(4)px
    $path%                    e.g. $opacity%

Path segments are runs of Unicode letters, digits and underscores. Arguments are
comma separated literals: quoted strings (single or double, `\` escapes the
next character), numbers and the booleans `true` and `false`. A suffix is a
run of letters or `%` written directly after the token.

The scanner is conservative: a `$` followed by a malformed argument list is
left alone. It never looks inside a matched token, so a `$` within a string
argument is not a token.

Example:
    tokens = tokens_scan(".a { padding: $space(2)rem; }")
"""

import re
from typing import Any, Final, Optional, Self

from p69.models.dataModel import Token

SIGIL: Final[str] = "$"

PATH_PATTERN: Final[re.Pattern[str]] = re.compile(r"\w+(?:\.\w+)*")
SUFFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z%]+")
NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?"
)
BOOLEAN_PATTERN: Final[re.Pattern[str]] = re.compile(r"(true|false)(?!\w)")
WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*")

QUOTES: Final[str] = "'\""
ESCAPE: Final[str] = "\\"


class TokenScanner:
    """Single use scanner over one piece of text.

    Attributes:
        text: The text being scanned
    """

    def __init__(self: Self, text: str) -> None:
        self.text: str = text

    def scan(self: Self) -> list[Token]:
        """Return all tokens in ascending order of position."""
        tokens: list[Token] = []
        cursor: int = self.text.find(SIGIL)

        while cursor != -1:
            token: Optional[Token] = self._token_read(cursor)
            if token is None:
                cursor = self.text.find(SIGIL, cursor + 1)
                continue
            tokens.append(token)
            cursor = self.text.find(SIGIL, token.span_end)

        return tokens

    def _token_read(self: Self, start: int) -> Optional[Token]:
        """Read a token whose sigil sits at `start`, or None if there isn't one."""
        match = PATH_PATTERN.match(self.text, start + len(SIGIL))
        if match is None:
            return None

        path: tuple[str, ...] = tuple(match.group().split("."))
        cursor: int = match.end()
        args: Optional[tuple[Any, ...]] = None

        if self.text.startswith("(", cursor):
            read = self._args_read(cursor)
            if read is None:
                return None
            args, cursor = read

        suffix: str = ""
        match = SUFFIX_PATTERN.match(self.text, cursor)
        if match is not None:
            suffix = match.group()

        return Token(path=path, args=args, suffix=suffix, start=start, end=cursor)

    def _args_read(self: Self, open_at: int) -> Optional[tuple[tuple[Any, ...], int]]:
        """Read a parenthesised argument list.

        Returns:
            The argument values and the offset just past `)`, or None when
            the list is malformed or unterminated.
        """
        args: list[Any] = []
        cursor: int = self._whitespace_skip(open_at + 1)

        if self.text.startswith(")", cursor):
            return (), cursor + 1

        while True:
            read = self._literal_read(cursor)
            if read is None:
                return None
            value, cursor = read
            args.append(value)

            cursor = self._whitespace_skip(cursor)
            if self.text.startswith(")", cursor):
                return tuple(args), cursor + 1
            if not self.text.startswith(",", cursor):
                return None
            cursor = self._whitespace_skip(cursor + 1)

    def _literal_read(self: Self, cursor: int) -> Optional[tuple[Any, int]]:
        """Read one string, number or boolean literal starting at `cursor`."""
        if cursor >= len(self.text):
            return None

        if self.text[cursor] in QUOTES:
            return self._string_read(cursor)

        match = BOOLEAN_PATTERN.match(self.text, cursor)
        if match is not None:
            return match.group() == "true", match.end()

        match = NUMBER_PATTERN.match(self.text, cursor)
        if match is not None:
            return number_parse(match.group()), match.end()

        return None

    def _string_read(self: Self, open_at: int) -> Optional[tuple[str, int]]:
        """Read a quoted string; None if the closing quote is missing."""
        quote: str = self.text[open_at]
        chars: list[str] = []
        cursor: int = open_at + 1

        while cursor < len(self.text):
            char: str = self.text[cursor]
            if char == quote:
                return "".join(chars), cursor + 1
            if char == ESCAPE:
                cursor += 1
                if cursor >= len(self.text):
                    break
                char = self.text[cursor]
            chars.append(char)
            cursor += 1

        return None

    def _whitespace_skip(self: Self, cursor: int) -> int:
        match = WHITESPACE_PATTERN.match(self.text, cursor)
        return match.end() if match else cursor


def number_parse(literal: str) -> int | float:
    """Convert a number literal, keeping integers as `int`."""
    if any(c in literal for c in ".eE"):
        return float(literal)
    return int(literal)


def tokens_scan(text: str) -> list[Token]:
    """Scan text for tokens.

    Args:
        text: Text to scan

    Returns:
        Tokens in ascending order of `start`; spans never overlap
    """
    return TokenScanner(text).scan()
