import dataclasses as D
import logging

import lsprotocol.types as L

from picols.ast import Comment
from picols.cartridge import TAB_SEPARATOR, SectionMarkers
from picols.markers import match_label, region_end, region_start
from picols.util import head_or_none

log = logging.getLogger(__name__)

DEFAULT_TAB_NAME = "tab"
DEFAULT_REGION_NAME = "region"


@D.dataclass(frozen=True)
class FoldingRegion:
    """A named folding region. Lines are 0-based and inclusive."""

    name: str
    start_line: int
    end_line: int

    @staticmethod
    def tab(index: int, name: str, start_line: int, end_line: int) -> "FoldingRegion":
        return FoldingRegion(f"{index}: {name}", start_line, end_line)

    def to_folding_range(self) -> L.FoldingRange:
        return L.FoldingRange(
            start_line=self.start_line,
            end_line=self.end_line,
            kind=L.FoldingRangeKind.Region,
            collapsed_text=self.name,
        )


@D.dataclass
class OpenRegion:
    """A `#region` marker still waiting for its `#endregion`."""

    # 1-based line of the `#region` comment.
    start_line: int
    name: str
    is_default_name: bool


def is_tab_separator(comment: Comment) -> bool:
    return comment.raw == TAB_SEPARATOR


def start_line_of(comment: Comment) -> int:
    return comment.location.start.line


class FoldingRegionProvider:
    """Names folding regions after cartridge tabs and `#region` comment markers.

    Tab regions are delimited by `-->8` comments within the `__lua__` section and
    named after the comment following each separator, e.g.:

    ```lua
    __lua__
    -- main loop        <-- "0: main loop"
    function _init() end
    -->8
    -- drawing          <-- "1: drawing"
    function _draw() end
    ```

    Labeled regions are delimited by `-- #region <label>` and `-- #endregion
    <label>` comments, which can be nested.
    """

    def serve(self, lines: list[str], comments: list[Comment]) -> list[FoldingRegion]:
        regions: list[FoldingRegion] = []
        last_line = len(lines) - 1
        markers = SectionMarkers.find(lines)
        sorted_comments = sorted(comments, key=start_line_of)

        tab_index = 0
        tab_start_line: int | None = None
        tab_name = DEFAULT_TAB_NAME
        open_regions: list[OpenRegion] = []

        if (initial := self._initial_tab(markers, sorted_comments)) is not None:
            regions.append(initial)
            tab_index += 1

        for i, comment in enumerate(sorted_comments):
            text = comment.value.strip()
            line = start_line_of(comment)

            if (label := match_label(region_start, text)) is not None:
                open_regions.append(
                    OpenRegion(line, label or DEFAULT_REGION_NAME, label == "")
                )
            elif (label := match_label(region_end, text)) is not None:
                if open_regions:
                    region = open_regions.pop()
                    # A label on the start marker always wins over one on the end
                    # marker.
                    name = label if region.is_default_name and label else region.name
                    regions.append(FoldingRegion(name, region.start_line - 1, line - 1))
                else:
                    log.debug("Ignoring unmatched #endregion at line %d", line)

            if is_tab_separator(comment):
                if tab_start_line is not None:
                    # Ends at the line above the separator.
                    regions.append(
                        FoldingRegion.tab(tab_index, tab_name, tab_start_line, line - 2)
                    )
                    tab_index += 1

                # The 1-based separator line is the 0-based line right below it.
                tab_start_line = line
                tab_name = self._tab_name_after(sorted_comments, i)

        if tab_start_line is not None:
            end_line = (
                last_line if markers.gfx_start_line is None else markers.gfx_start_line
            )
            regions.append(
                FoldingRegion.tab(tab_index, tab_name, tab_start_line, end_line)
            )

        # Unclosed regions fold till the end of the document. Note that, unlike closed
        # regions, the 1-based start line is reported unconverted, so these regions
        # start at the line below the `#region` marker.
        while open_regions:
            region = open_regions.pop()
            regions.append(FoldingRegion(region.name, region.start_line, last_line))

        return sorted(regions, key=lambda r: (r.start_line, r.end_line))

    def _initial_tab(
        self,
        markers: SectionMarkers,
        sorted_comments: list[Comment],
    ) -> FoldingRegion | None:
        """Returns the region of the first tab, from `__lua__` to the first `-->8`."""
        if (lua_start_line := markers.lua_start_line) is None:
            return None

        first_separator = head_or_none(
            comment
            for comment in sorted_comments
            if is_tab_separator(comment)
            if start_line_of(comment) - 1 > lua_start_line
        )

        if first_separator is None:
            return None

        start_line = lua_start_line + 1
        first_line_comment = head_or_none(
            comment
            for comment in sorted_comments
            if start_line_of(comment) - 1 == start_line
        )

        name = (
            DEFAULT_TAB_NAME
            if first_line_comment is None
            else first_line_comment.value.strip()
        )

        return FoldingRegion.tab(
            0, name, start_line, start_line_of(first_separator) - 2
        )

    def _tab_name_after(self, sorted_comments: list[Comment], index: int) -> str:
        """Names a tab after the comment following its `-->8` separator."""
        if index + 1 >= len(sorted_comments):
            return DEFAULT_TAB_NAME

        next_comment = sorted_comments[index + 1]

        if is_tab_separator(next_comment):
            return DEFAULT_TAB_NAME

        return next_comment.value.strip() or DEFAULT_TAB_NAME
