import dataclasses as D
from typing import Any

import lsprotocol.types as L
from lsprotocol.converters import get_converter

from picols.cartridge import GFX_MARKER, LUA_MARKER, TAB_SEPARATOR, split_lines
from picols.util import utf16_length


@D.dataclass(frozen=True)
class TabLineNumber:
    """The 1-based number of a line within its cartridge tab."""

    range: L.Range
    line_in_tab: int

    def to_json(self) -> dict[str, Any]:
        return {
            "range": get_converter().unstructure(self.range, L.Range),
            "lineInTab": self.line_in_tab,
        }


class TabLineNumberProvider:
    def serve(self, source: str) -> list[TabLineNumber]:
        lines = split_lines(source)
        lua_start_line: int | None = None
        lua_end_line = len(lines)

        for i, line in enumerate(lines):
            if line.strip() == LUA_MARKER:
                lua_start_line = i
            elif lua_start_line is not None and line.strip().startswith(GFX_MARKER):
                lua_end_line = i
                break

        if lua_start_line is None:
            return []

        line_numbers: list[TabLineNumber] = []
        line_in_tab = 1

        for i in range(lua_start_line + 1, lua_end_line):
            if lines[i].strip() == TAB_SEPARATOR:
                line_in_tab = 1
                continue

            # Characters are counted in UTF-16 code units, the default LSP position
            # encoding. Many PICO-8 glyphs lie outside the BMP.
            span = L.Range(
                start=L.Position(i, 0),
                end=L.Position(i, utf16_length(lines[i])),
            )

            line_numbers.append(TabLineNumber(span, line_in_tab))
            line_in_tab += 1

        return line_numbers
