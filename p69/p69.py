"""
P69 Plugin Main Module.

Entry point for the P69 ChRIS plugin: rewrites `$` tokens in every `.p69`
file found under the input directory and writes CSS to the output directory.

Token maps are read from JSON files given with `--tokens`, earlier files
taking precedence. Without `--tokens` the user's config file is used when it
exists.

Examples:
    Mirror the input tree as CSS files:
        $ p69 --tokens theme.json inputdir/ outputdir/

    Write everything into one stylesheet:
        $ p69 --tokens theme.json --tokens base.json --amalgamate app.css in/ out/

    Leave unknown tokens in place without reporting them:
        $ p69 --tokens theme.json --keepMissing in/ out/
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from chris_plugin import chris_plugin
from p69.config.settings import TOKENS_FILE, tokenMaps_load
from p69.lib.files import files_process
from p69.models.dataModel import FilesResult, Options
import asyncio
from rich.console import Console
from p69.lib.log import LOG
import sys
from typing import Any, Final

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()

parser: Final[ArgumentParser] = ArgumentParser(
    description="Rewrites $tokens in .p69 style sheets into CSS.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--tokens",
    type=str,
    action="append",
    default=None,
    help=f"JSON token map file, repeatable (default: {TOKENS_FILE})",
)
parser.add_argument(
    "--amalgamate",
    type=str,
    default=None,
    help="Write all output into this file inside outputdir",
)
parser.add_argument(
    "--keepMissing",
    action="store_true",
    help="Leave unknown tokens in place without reporting them",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def tokenFiles_get(options: Namespace) -> list[Path]:
    """Token map files named on the command line, else the config file if present."""
    if options.tokens:
        return [Path(f) for f in options.tokens]
    if TOKENS_FILE.is_file():
        return [TOKENS_FILE]
    return []


async def async_main(
    options: Namespace, inputdir: Path, outputdir: Path
) -> FilesResult:
    """Load token maps and process the input tree.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing .p69 files
        outputdir: Directory for generated CSS

    Returns:
        FilesResult describing the run
    """
    try:
        token_maps: list[dict[str, Any]] = tokenMaps_load(tokenFiles_get(options))
    except (OSError, ValueError) as e:
        LOG(f"Token maps failed to load: {e}")
        console.print(f"[bold red]Error:[/bold red] {e}")
        return FilesResult(status=False, message=str(e))

    out: Path | None = outputdir / options.amalgamate if options.amalgamate else None
    result: FilesResult = await files_process(
        token_maps,
        inputdir,
        out=out,
        outputdir=outputdir,
        options=Options(error_if_missing=not options.keepMissing),
    )

    if result.status:
        console.print(
            f"[bold green]Processed {len(result.processed)} file(s).[/bold green]"
        )
    else:
        console.print(f"[bold red]{result.message}[/bold red]")
    return result


@chris_plugin(
    parser=parser,
    title="P69 token rewriter",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input files
        outputdir: Directory for output files
    """
    result: FilesResult = asyncio.run(async_main(options, inputdir, outputdir))
    if not result.status:
        sys.exit(1)
