"""
File processing for P69.

Finds `.p69` source files in a directory tree, rewrites their tokens and
writes the results as CSS. Output goes either to a `.css` file next to each
source (or mirrored under an output directory), or into one amalgamated file.

A file that fails is reported and skipped; the remaining files are still
processed.
"""

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rich.console import Console

from p69.config.settings import appsettings
from p69.lib.engine import replace_all
from p69.lib.log import LOG
from p69.models.dataModel import FilesResult, Options, TokenMap

console: Console = Console(stderr=True)


def files_list(root: Path) -> list[Path]:
    """List source files under `root`, sorted by path.

    Raises:
        FileNotFoundError: If `root` is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Source directory not found: {root}")
    return sorted(p for p in root.rglob(f"*.{appsettings.sourceExt}") if p.is_file())


def cssPath_resolve(
    p69File: Path, src: Optional[Path] = None, outputdir: Optional[Path] = None
) -> Path:
    """Work out where the CSS for a source file is written.

    Args:
        p69File: The source file
        src: Root of the source tree
        outputdir: When given with `src`, outputs mirror the source tree here

    Returns:
        Path: Target file path with the target extension
    """
    target: Path = p69File.with_suffix(f".{appsettings.targetExt}")
    if outputdir is not None and src is not None:
        target = Path(outputdir) / target.relative_to(src)
    return target


async def text_read(path: Path) -> str:
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


async def text_append(path: Path, text: str) -> None:
    def append() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)

    await asyncio.to_thread(append)


async def text_write(path: Path, text: str) -> None:
    def write() -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    await asyncio.to_thread(write)


async def file_process(
    p69File: Path,
    token_maps: TokenMap | Sequence[TokenMap],
    out: Optional[Path] = None,
    options: Optional[Options] = None,
    src: Optional[Path] = None,
    outputdir: Optional[Path] = None,
) -> Path:
    """Rewrite one source file.

    Args:
        p69File: Source file to read
        token_maps: A token map, or token maps in precedence order
        out: Amalgamation target; when None a per-file target is written
        options: Rewrite options; `reference` is set to the file path
        src: Root of the source tree, for mirrored outputs
        outputdir: Directory mirroring the source tree

    Returns:
        Path: The file written to

    Raises:
        OSError: If the source cannot be read or the target written
        ValueError: If the source is not valid UTF-8
        Exception: Whatever the error sink in `options` raises
    """
    options = (options or Options()).model_copy(update={"reference": str(p69File)})
    css: str = await text_read(p69File)
    css = replace_all(token_maps, css, options).strip()

    if out is not None:
        await text_append(out, css + "\n\n")
        return out

    target: Path = cssPath_resolve(p69File, src, outputdir)
    await text_write(target, css + "\n")
    return target


async def files_process(
    token_maps: TokenMap | Sequence[TokenMap],
    src: Path,
    out: Optional[Path] = None,
    outputdir: Optional[Path] = None,
    options: Optional[Options] = None,
) -> FilesResult:
    """Rewrite every source file in a tree.

    Args:
        token_maps: A token map, or token maps in precedence order
        src: Root of the source tree
        out: Single file collecting all output; replaced if it exists
        outputdir: Directory mirroring the source tree for per-file output
        options: Rewrite options shared by all files

    Returns:
        FilesResult with processed and failed files
    """
    src = Path(src)
    try:
        p69Files: list[Path] = files_list(src)
    except OSError as e:
        LOG(f"Listing {src} failed: {e}")
        console.print(f"[bold red]Error:[/bold red] {e}")
        return FilesResult(status=False, message=str(e))

    if out is not None:
        Path(out).unlink(missing_ok=True)

    result: FilesResult = FilesResult(status=True)
    for p69File in p69Files:
        try:
            await file_process(
                p69File,
                token_maps,
                Path(out) if out is not None else None,
                options,
                src,
                outputdir,
            )
            result.processed.append(str(p69File))
        except Exception as e:
            LOG(f"Processing {p69File} failed: {e}")
            console.print(f"[bold red]Error:[/bold red] {e}")
            result.failed.append(str(p69File))

    if result.failed:
        result.status = False
        result.message = f"{len(result.failed)} file(s) failed"
    return result
