import tree_sitter as T
import tree_sitter_lua as Lua

from picols.cartridge import lua_section_of, split_lines
from picols.shorthand import expand_shorthand

LANG_LUA = T.Language(Lua.language())
LUA_TS_PARSER = T.Parser(LANG_LUA)


def lua_source_of(source: str) -> str:
    """Returns the plain Lua code of a PICO-8 source, line by line.

    Lines outside the `__lua__` section of a cartridge are blanked, and PICO-8
    shorthand within it is rewritten into plain Lua. Line indices are preserved so
    that CST lines map back to the document. Sources without a `__lua__` marker are
    treated as Lua code entirely.
    """
    lines = split_lines(source)
    section = lua_section_of(lines)

    return "\n".join(
        expand_shorthand(line) if section is None or i in section else ""
        for i, line in enumerate(lines)
    )


def parse_lua(source: str) -> T.Node:
    return LUA_TS_PARSER.parse(lua_source_of(source).encode()).root_node
