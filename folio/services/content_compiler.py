import html
import logging
from typing import Iterable, Iterator, List, Optional

import markdown
from pydantic import BaseModel, Field

from folio.schemas.blog import TocEntry

logger = logging.getLogger(__name__)


class CompileOptions(BaseModel):
    bibliography: Optional[str] = None
    content_root: Optional[str] = None
    toc_depth: str = "1-6"


class CompiledContent(BaseModel):
    html: str
    toc: List[TocEntry] = Field(default_factory=list)


class MarkdownCompiler:
    """
    Default body compiler: Markdown to HTML plus a flat table of contents.

    Footnotes, tables and fenced code come from the `extra` extension; heading
    ids and permalinks from `toc`. Citation rendering is not implemented, the
    bibliography option is only received.
    """

    extensions = ["extra", "sane_lists", "toc"]

    def compile(self, source: str, options: Optional[CompileOptions] = None) -> CompiledContent:
        options = options or CompileOptions()
        md = markdown.Markdown(
            extensions=self.extensions,
            extension_configs={
                "toc": {"toc_depth": options.toc_depth, "permalink": True}
            },
        )
        rendered = md.convert(source)
        toc = list(flatten_toc_tokens(md.toc_tokens))

        if options.bibliography:
            logger.debug(
                f"Bibliography {options.bibliography} received, citations left as written"
            )
        logger.debug(f"Compiled {len(source)} chars into {len(toc)} toc entries")
        return CompiledContent(html=rendered, toc=toc)


def flatten_toc_tokens(tokens: Iterable[dict]) -> Iterator[TocEntry]:
    for token in tokens:
        yield TocEntry(
            value=html.unescape(token["name"]),
            url=f"#{token['id']}",
            depth=token["level"],
        )
        yield from flatten_toc_tokens(token.get("children", []))
