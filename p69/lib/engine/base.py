r"""
Token rewrite engine.

Replaces every `$` token in a piece of text with its value from one or more
token maps. Failures never abort the rewrite: each one is handed to the
caller's error sink and the token's source text is kept as written.

Processing:
1. Normalize the text to NFC
2. Scan it once for tokens
3. Resolve tokens from last to first, reporting failures
4. Assemble the output from untouched text and replacements in one pass

Example:
    replace_all({"color": "blue"}, ".a{color:$color}")
    # ".a{color:blue}"
"""

import unicodedata
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from rich.console import Console

from p69.lib.engine.errors import MissingTokenError, ResolutionError
from p69.lib.engine.lookup import path_lookup
from p69.lib.engine.resolver import suffix_append, value_resolve
from p69.lib.engine.scanner import tokens_scan
from p69.lib.log import LOG
from p69.models.dataModel import ErrorSink, Options, Token, TokenMap, TokenValue

stdout: Console = Console()
stderr: Console = Console(stderr=True)

TAG: str = "[P69]"


def error_report(error: Exception, token: Token, options: Options) -> None:
    """Default error sink: print the failure and carry on.

    Writes the reference and the error to stderr and a JSON dump of the
    token to stdout.
    """
    LOG(f"{error} ({token.dotted} @ {token.start})")
    if options.reference:
        stderr.print(TAG, options.reference, markup=False, highlight=False)
    stderr.print(TAG, str(error), markup=False, highlight=False)
    stdout.print(TAG, token.model_dump_json(indent=2), markup=False, highlight=False)


def options_get(options: Optional[Options]) -> Options:
    """Fill in defaults for missing options."""
    options = options if options is not None else Options()
    if options.on_error is None:
        options = options.model_copy(update={"on_error": error_report})
    return options


def tokenMaps_normalize(
    token_maps: TokenMap | Sequence[TokenMap],
) -> Sequence[TokenMap]:
    """Accept a single token map or a sequence of them."""
    if isinstance(token_maps, Mapping):
        return [token_maps]
    return token_maps


def token_resolve(token_maps: Sequence[TokenMap], token: Token) -> tuple[bool, str]:
    """Resolve a single token to its replacement text.

    Returns:
        Whether the path was found, and the replacement text

    Raises:
        ResolutionError: If the found value cannot be resolved
    """
    value: Optional[TokenValue] = path_lookup(token_maps, token.path)
    if value is None:
        return False, ""

    resolved: Any = value_resolve(value, token.args, token.dotted)
    text: Optional[str] = suffix_append(resolved, token.suffix, token.dotted)
    return True, "" if text is None else text


def content_splice(content: str, replacements: list[tuple[Token, str]]) -> str:
    """Build the output from untouched text and replacements.

    Args:
        content: The normalized input text
        replacements: Tokens and their replacement text, in ascending order
    """
    parts: list[str] = []
    cursor: int = 0
    for token, text in replacements:
        parts.append(content[cursor : token.start])
        parts.append(text)
        cursor = token.span_end
    parts.append(content[cursor:])
    return "".join(parts)


def tokens_replace(
    token_maps: Sequence[TokenMap], content: str, options: Options
) -> str:
    """Resolve all tokens in `content`, reporting failures to `options.on_error`."""
    report: ErrorSink = options.on_error
    replacements: list[tuple[Token, str]] = []

    for token in reversed(tokens_scan(content)):
        try:
            found, text = token_resolve(token_maps, token)
        except ResolutionError as e:
            report(e, token, options)
            continue

        if not found:
            if options.error_if_missing:
                report(MissingTokenError(token.dotted), token, options)
            continue

        replacements.append((token, text))

    replacements.reverse()
    return content_splice(content, replacements)


def replace_all(
    token_maps: TokenMap | Sequence[TokenMap],
    content: str,
    options: Optional[Options] = None,
) -> str:
    """Replace every token in `content` with its value.

    Args:
        token_maps: A token map, or token maps in precedence order
        content: Text containing `$` tokens
        options: Rewrite options; defaults come from application settings

    Returns:
        The NFC normalized text with every resolvable token replaced. Tokens
        that are missing or fail to resolve are left as written.

    Raises:
        Whatever `options.on_error` raises; nothing else.
    """
    options = options_get(options)
    content = unicodedata.normalize("NFC", content)
    return tokens_replace(tokenMaps_normalize(token_maps), content, options)
