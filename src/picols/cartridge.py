"""Markers of the PICO-8 `.p8` cartridge format.

A cartridge is a text file split into sections by header lines such as
`__lua__` and `__gfx__`. The `__lua__` section is further split into tabs by
`-->8` lines.
"""

import dataclasses as D

LUA_MARKER = "__lua__"
GFX_MARKER = "__gfx__"
TAB_SEPARATOR = "-->8"

SECTION_MARKERS = (
    LUA_MARKER,
    GFX_MARKER,
    "__gff__",
    "__label__",
    "__map__",
    "__sfx__",
    "__music__",
)


def split_lines(text: str) -> list[str]:
    """Splits text into lines the way editors count them.

    Unlike `str.splitlines`, a trailing newline yields a final empty line.
    """
    return text.replace("\r\n", "\n").split("\n")


@D.dataclass(frozen=True)
class SectionMarkers:
    """0-based lines of the last `__lua__` and `__gfx__` markers, if any."""

    lua_start_line: int | None = None
    gfx_start_line: int | None = None

    @staticmethod
    def find(lines: list[str]) -> "SectionMarkers":
        lua_start_line: int | None = None
        gfx_start_line: int | None = None

        for i, line in enumerate(lines):
            if (stripped := line.strip()) == LUA_MARKER:
                lua_start_line = i
            elif stripped == GFX_MARKER:
                gfx_start_line = i

        return SectionMarkers(lua_start_line, gfx_start_line)


def lua_section_of(lines: list[str]) -> range | None:
    """Returns line indices inside the last `__lua__` section, if any.

    The section runs up to the next section header or the end of the text.
    """
    start = SectionMarkers.find(lines).lua_start_line
    if start is None:
        return None

    end = next(
        (
            i
            for i in range(start + 1, len(lines))
            if lines[i].strip() in SECTION_MARKERS
        ),
        len(lines),
    )

    return range(start + 1, end)
