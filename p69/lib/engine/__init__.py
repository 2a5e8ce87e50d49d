"""
Token rewrite engine for P69.

Scans text for `$` tokens, looks them up in ordered token maps, resolves
literal and callable values and splices the results back into the text.
"""

from .base import replace_all, error_report, options_get
from .errors import P69Error, MissingTokenError, ResolutionError
from .lookup import path_lookup
from .resolver import value_resolve, suffix_append, value_stringify
from .scanner import TokenScanner, tokens_scan

__all__ = [
    "replace_all",
    "error_report",
    "options_get",
    "P69Error",
    "MissingTokenError",
    "ResolutionError",
    "path_lookup",
    "value_resolve",
    "suffix_append",
    "value_stringify",
    "TokenScanner",
    "tokens_scan",
]
