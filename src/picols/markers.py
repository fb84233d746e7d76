"""Grammars of the textual markers carried by Lua comments."""

import parsy as P

# The opening long bracket of a block comment, e.g. `[[` or `[==[`. Yields the
# `=` padding, which the closing bracket has to repeat.
long_bracket_open = P.string("[") >> P.regex(r"=*") << P.string("[")

label = P.regex(r"\s*") >> P.regex(r".*").map(str.strip)

region_start = P.string("#region") >> label
region_end = P.string("#endregion") >> label


def comment_value(raw: str) -> str:
    """Returns the body of a raw Lua comment without its delimiters."""
    body = raw.removeprefix("--")

    try:
        level, rest = long_bracket_open.parse_partial(body)
    except P.ParseError:
        return body

    return rest.removesuffix(f"]{level}]")


def match_label(marker: P.Parser, text: str) -> str | None:
    """Matches the whole text against a marker, returning its (maybe empty) label."""
    try:
        return marker.parse(text)
    except P.ParseError:
        return None
