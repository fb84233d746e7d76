import logging
from pathlib import Path
from urllib.parse import unquote, urlparse

import lsprotocol.types as L

from picols.ast import Chunk
from picols.cartridge import split_lines
from picols.parsing import parse_lua
from picols.providers import (
    FoldingRangeProvider,
    FoldingRegionProvider,
    TabLineNumber,
    TabLineNumberProvider,
)
from picols.typing import URI

log = logging.root


def path_of(uri: URI) -> Path:
    return Path(unquote(urlparse(uri).path))


class DocumentIndex:
    """Folding information computed from one snapshot of a document."""

    def __init__(self, uri: URI, source: str) -> None:
        self.uri = uri
        self.source = source
        self.lines = split_lines(source)
        self.chunk = Chunk.from_cst(parse_lua(source))

        self.block_ranges = FoldingRangeProvider().serve(self.chunk)
        self.regions = FoldingRegionProvider().serve(self.lines, self.chunk.comments)
        self.tab_line_numbers: list[TabLineNumber] = TabLineNumberProvider().serve(
            source
        )

        log.debug(
            "Indexed %s: %d block ranges, %d regions, %d tab lines",
            uri,
            len(self.block_ranges),
            len(self.regions),
            len(self.tab_line_numbers),
        )

    @staticmethod
    def load(uri: URI, source: str | None = None) -> "DocumentIndex":
        source = source if source is not None else path_of(uri).read_text("utf-8")
        return DocumentIndex(uri, source)

    @property
    def folding_ranges(self) -> list[L.FoldingRange]:
        """Block ranges and named regions merged into one sorted list."""
        return sorted(
            [region.to_folding_range() for region in self.regions] + self.block_ranges,
            key=lambda r: (r.start_line, r.end_line),
        )
