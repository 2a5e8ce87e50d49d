"""
Style preprocessor adapter for P69.

Plugs the token rewrite engine into a host build tool that hands over style
blocks one at a time (the Svelte preprocessor contract: a `name` and an async
`style` hook receiving the block's content, attributes and filename).

On its first style block a preprocessor configured with a `root` also
processes the whole source tree once. That "primed" flag belongs to the
preprocessor instance, so separate instances never share it.

Example:
    preprocessor = StylePreprocessor({"color": "blue"}, root=Path("./src"))
    result = await preprocessor.style(
        content=".a{color:$color}", attributes={"lang": "p69"}, filename="App.svelte"
    )
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Self

from p69.config.settings import appsettings
from p69.lib.engine import replace_all
from p69.lib.files import files_process
from p69.lib.log import LOG
from p69.models.dataModel import (
    FilesResult,
    Options,
    PreprocessorState,
    StyleResult,
    TokenMap,
)


class StylePreprocessor:
    """Rewrites tokens in style blocks handed over by a build tool.

    Attributes:
        name: Name reported to the host build tool
        token_maps: Token maps in precedence order
        root: Source tree processed once on the first style block, if set
        amalgamate: Single output file for the source tree, if set
        mime_types: Accepted values of a style block's `lang` attribute
        options: Rewrite options shared by all blocks
        state: Per-instance processing state
    """

    name: str = "P69: CSS preprocessor"

    def __init__(
        self: Self,
        token_maps: TokenMap | Sequence[TokenMap],
        root: Optional[Path] = None,
        amalgamate: Optional[Path] = None,
        mime_types: Optional[Sequence[Optional[str]]] = None,
        options: Optional[Options] = None,
    ) -> None:
        self.token_maps: TokenMap | Sequence[TokenMap] = token_maps
        self.root: Optional[Path] = Path(root) if root is not None else None
        self.amalgamate: Optional[Path] = (
            Path(amalgamate) if amalgamate is not None else None
        )
        self.mime_types: list[Optional[str]] = list(
            mime_types if mime_types is not None else appsettings.mimeTypes
        )
        self.options: Options = options or Options()
        self.state: PreprocessorState = PreprocessorState()

    async def prime(self: Self) -> Optional[FilesResult]:
        """Process the source tree unless it has been done already."""
        if self.state.primed or self.root is None:
            return None

        self.state.primed = True
        LOG(f"Processing source tree {self.root}")
        return await files_process(
            self.token_maps, self.root, out=self.amalgamate, options=self.options
        )

    def accepts(self: Self, lang: Optional[str]) -> bool:
        return lang in self.mime_types

    async def style(
        self: Self,
        content: str,
        attributes: Mapping[str, Any],
        filename: Optional[str] = None,
        markup: Optional[str] = None,
    ) -> StyleResult:
        """Rewrite one style block.

        Args:
            content: The style block's text
            attributes: The style tag's attributes; `lang` selects P69 blocks
            filename: Component file holding the block, used as reference
            markup: The component's markup, unused

        Returns:
            StyleResult with the rewritten code, or the content unchanged if
            the block's language is not accepted
        """
        await self.prime()

        if not self.accepts(attributes.get("lang")):
            return StyleResult(code=content)

        options: Options = self.options.model_copy(update={"reference": filename})
        return StyleResult(code=replace_all(self.token_maps, content, options))
