"""Rewrites PICO-8 shorthand syntax into plain Lua, one line at a time.

The Lua grammar rejects PICO-8 extensions such as `a += 1` or `if (c) stmt`, and
tree-sitter recovers from them by swallowing the rest of the file into a single
error node. Every rewrite keeps the line on a single line, so that line numbers of
the rewritten source still match the document. Columns may shift.
"""

import parsy as P

string_literal = P.regex(r'"(\\.|[^"\\])*"') | P.regex(r"'(\\.|[^'\\])*'")


@P.generate
def parenthesized():
    yield P.string("(")
    inner = yield (P.regex(r"[^()'\"]+") | string_literal | parenthesized).many()
    yield P.string(")")
    return f"({''.join(inner)})"


# Code up to an optional trailing line comment.
code = (string_literal | P.regex(r"[^'\"-]+") | P.regex(r"-(?!-)")).many().concat()
trailing_comment = P.regex(r"(--.*)?")

indent = P.regex(r"[ \t]*")
assignee = P.regex(r"[A-Za-z_][\w.\[\]]*")

# PICO-8 operators without a Lua counterpart are mapped to one of the same arity.
COMPOUND_OPERATORS: dict[str, str] = {
    ">>>": ">>",
    ">><": ">>",
    "<<>": "<<",
    "^^": "~",
    "..": "..",
    "<<": "<<",
    ">>": ">>",
    "//": "//",
    "\\": "//",
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "%": "%",
    "^": "^",
    "|": "|",
    "&": "&",
}

compound_operator = P.alt(*map(P.string, COMPOUND_OPERATORS)).map(
    COMPOUND_OPERATORS.get
)

compound_assignment = P.seq(
    indent,
    assignee << P.regex(r"[ \t]*"),
    compound_operator << P.string("=") << P.regex(r"[ \t]*"),
    P.regex(r".+"),
).combine(lambda indent, lhs, op, rhs: f"{indent}{lhs} = {lhs} {op} {rhs}")

# The keyword closing the condition of a multi-line `if` or `while` statement.
OPENERS: dict[str, str] = {"if": "then", "while": "do"}

shorthand_head = P.seq(
    indent,
    P.regex(r"(if|while)\b") << P.regex(r"[ \t]*"),
    parenthesized,
    P.regex(r".*"),
)


def expand_compound_assignment(statement: str) -> str:
    try:
        return compound_assignment.parse(statement)
    except P.ParseError:
        return statement


def expand_conditional(line: str) -> str | None:
    """Expands `if (c) stmt` and `while (c) stmt` into their multi-keyword forms."""
    try:
        indent, keyword, condition, rest = shorthand_head.parse(line)
        body, comment = P.seq(code, trailing_comment).parse(rest)
    except P.ParseError:
        return None

    opener = OPENERS[keyword]

    # Not a shorthand if the body is empty, carries the opener keyword, or continues
    # the condition, e.g. `if (a) then`, `if (a) and b then` or `if (a) or`.
    words = body.split()

    if not words or opener in words or words[0] in ("and", "or"):
        return None

    body = expand_compound_assignment(body.strip())
    return f"{indent}{keyword} {condition} {opener} {body} end {comment}".rstrip()


def expand_shorthand(line: str) -> str:
    """Rewrites a single line of PICO-8 shorthand into plain Lua."""
    if (expanded := expand_conditional(line)) is not None:
        return expanded

    return expand_compound_assignment(line)
