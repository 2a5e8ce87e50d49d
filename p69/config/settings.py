"""
settings.py

Application configuration for P69.

Features:
- Centralized configuration using Pydantic settings (`P69_` environment prefix)
- Default location of the user's token map file
- Loading of JSON token maps

Usage:
Import appsettings for configuration values and `tokenMaps_load` to read
token maps for the command line.
"""

import json
from pathlib import Path
from typing import Any, Final, Iterable
from appdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict
from p69.lib.log import LOG

CONFIG_DIR: Final[Path] = Path(user_config_dir("p69", ""))
TOKENS_FILE: Final[Path] = CONFIG_DIR / "tokens.json"

DEFAULT_REFERENCE: Final[str] = "¯\\_(ツ)_/¯"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the P69_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        reference: Advisory label printed with reported token errors
        errorIfMissing: Report tokens that no token map defines
        sourceExt: File extension of source files
        targetExt: File extension of generated files
        mimeTypes: Style block languages accepted by the preprocessor
    """

    beQuiet: bool = False
    reference: str = DEFAULT_REFERENCE
    errorIfMissing: bool = True
    sourceExt: str = "p69"
    targetExt: str = "css"
    mimeTypes: list[str] = ["p69", "text/p69"]

    model_config = SettingsConfigDict(
        env_prefix="P69_",
        case_sensitive=False,
        extra="allow",
    )


def tokenMap_validate(data: Any, source: Path) -> list[dict[str, Any]]:
    """
    Check that decoded JSON holds a token map or a list of token maps.

    Args:
        data: The decoded JSON document
        source: File the document came from, for error messages

    Returns:
        list[dict]: The token maps in precedence order

    Raises:
        ValueError: If the document is not an object or a list of objects
    """
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(m, dict) for m in data):
        return data
    raise ValueError(f"{source}: expected a JSON object or a list of objects")


def tokenMaps_load(paths: Iterable[Path]) -> list[dict[str, Any]]:
    """
    Read token maps from JSON files.

    Maps are returned in the order the files are given, so earlier files
    take precedence during lookup.

    Args:
        paths: JSON files holding a token map or a list of token maps

    Returns:
        list[dict]: All token maps, flattened in order

    Raises:
        ValueError: If a file is not valid JSON or has the wrong shape
    """
    maps: list[dict[str, Any]] = []
    for path in paths:
        try:
            data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            LOG(f"Invalid token map {path}: {e}")
            raise ValueError(f"{path}: invalid JSON ({e})") from e
        maps.extend(tokenMap_validate(data, Path(path)))
    return maps


# Create the application settings instance
appsettings: Final[App] = App()
