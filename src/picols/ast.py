import dataclasses as D
import logging
from itertools import takewhile
from typing import Any, Callable, ClassVar, Collection, Type, TypeVar

import tree_sitter as T

from picols.markers import comment_value
from picols.pretty import PrettyTree

log = logging.getLogger(__name__)


@D.dataclass(frozen=True, order=True)
class Pos:
    """A source position. Both the line and the column are 1-based."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@D.dataclass(frozen=True)
class SourceLocation:
    start: Pos
    end: Pos

    def __post_init__(self):
        assert self.start <= self.end, f"Inverted location: {self}"

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def position_of(point: T.Point) -> Pos:
    return Pos(point.row + 1, point.column + 1)


def location_of(node: T.Node) -> SourceLocation:
    return SourceLocation(position_of(node.start_point), position_of(node.end_point))


def strip_comments(nodes: list[T.Node]) -> list[T.Node]:
    return [node for node in nodes if not node.type == "comment"]


ParseCST = Callable[[T.Node], "AST"]

ASTType = TypeVar("ASTType", bound="AST")


@D.dataclass
class AST:
    location: SourceLocation | None

    registry: ClassVar[dict[str, ParseCST]] = {}

    @staticmethod
    def register(fn: ParseCST, *node_types: str):
        for node_type in node_types:
            assert node_type not in AST.registry, f'"{node_type}" already registered.'
            AST.registry[node_type] = fn

    @staticmethod
    def from_cst(node: T.Node) -> "AST":
        try:
            cst_parser = AST.registry.get(node.type, Unknown.from_cst)
            return cst_parser(node)
        except Exception:
            log.debug("Failed to convert %s at %s", node.type, location_of(node))
            return ErrorAST.from_cst(node)

    def to(self, expect_type: Type[ASTType]) -> ASTType:
        if not isinstance(self, expect_type):
            raise TypeError(
                f"Expected {expect_type.__qualname__}, but got {type(self).__name__}"
            )

        return self

    @property
    def pretty_tree(self) -> str:
        return str(PrettyAST(self))

    @property
    def is_leaf(self) -> bool:
        return False


def statements_of(node: T.Node) -> list[AST]:
    return [
        AST.from_cst(child)
        for child in strip_comments(node.named_children)
        if child.type != "hash_bang_line"
    ]


def body_of(node: T.Node, skipped: Collection[str] = ()) -> list[AST]:
    """Returns what a CST node owns that may contain foldable constructs.

    Statements of directly owned blocks are kept as is, while other children, e.g.
    conditions and expression lists, are only kept if they are not leaves.
    """
    body: list[AST] = []

    for child in strip_comments(node.named_children):
        if child.type == "block":
            body.extend(statements_of(child))
        elif child.type not in skipped and not (ast := AST.from_cst(child)).is_leaf:
            body.append(ast)

    return body


def comments_of(node: T.Node) -> list["Comment"]:
    if node.type == "comment":
        return [Comment.from_cst(node)]
    return [comment for child in node.children for comment in comments_of(child)]


@D.dataclass
class Comment:
    location: SourceLocation
    # The comment text including the leading `--` and any long brackets.
    raw: str
    value: str

    @staticmethod
    def from_cst(node: T.Node) -> "Comment":
        assert node.type == "comment"
        assert node.text is not None
        raw = node.text.decode()
        return Comment(location_of(node), raw, comment_value(raw))


@D.dataclass
class Chunk(AST):
    body: list[AST]
    comments: list[Comment] = D.field(default_factory=list)

    @staticmethod
    def from_cst(node: T.Node) -> "Chunk":
        assert node.type == "chunk"
        return Chunk(location_of(node), statements_of(node), comments_of(node))


@D.dataclass
class Block(AST):
    """A statement owning a single block of statements."""

    body: list[AST]


@D.dataclass
class While(Block):
    @staticmethod
    def from_cst(node: T.Node) -> "While":
        assert node.type == "while_statement"
        return While(location_of(node), body_of(node))

    AST.register(from_cst, "while_statement")


@D.dataclass
class Do(Block):
    @staticmethod
    def from_cst(node: T.Node) -> "Do":
        assert node.type == "do_statement"
        return Do(location_of(node), body_of(node))

    AST.register(from_cst, "do_statement")


@D.dataclass
class Repeat(Block):
    @staticmethod
    def from_cst(node: T.Node) -> "Repeat":
        assert node.type == "repeat_statement"
        return Repeat(location_of(node), body_of(node))

    AST.register(from_cst, "repeat_statement")


@D.dataclass
class ForNumeric(Block):
    pass


@D.dataclass
class ForGeneric(Block):
    pass


def for_from_cst(node: T.Node) -> ForNumeric | ForGeneric:
    assert node.type == "for_statement"

    if any(child.type == "for_numeric_clause" for child in node.named_children):
        return ForNumeric(location_of(node), body_of(node))
    else:
        return ForGeneric(location_of(node), body_of(node))


AST.register(for_from_cst, "for_statement")


@D.dataclass
class Function(Block):
    # `None` for anonymous function expressions.
    name: str | None = None
    is_local: bool = False

    @staticmethod
    def from_cst(node: T.Node) -> "Function":
        assert node.type in [
            "function_declaration",
            "local_function_declaration",
            "function_definition",
        ]

        name = node.child_by_field_name("name")

        return Function(
            location=location_of(node),
            body=body_of(node),
            name=None if name is None or name.text is None else name.text.decode(),
            is_local=node.children[0].type == "local",
        )

    AST.register(
        from_cst,
        "function_declaration",
        "local_function_declaration",
        "function_definition",
    )


@D.dataclass
class Clause(Block):
    pass


@D.dataclass
class IfClause(Clause):
    pass


@D.dataclass
class ElseifClause(Clause):
    @staticmethod
    def from_cst(node: T.Node) -> "ElseifClause":
        assert node.type == "elseif_statement"
        return ElseifClause(location_of(node), body_of(node))


@D.dataclass
class ElseClause(Clause):
    @staticmethod
    def from_cst(node: T.Node) -> "ElseClause":
        assert node.type == "else_statement"
        return ElseClause(location_of(node), body_of(node))


ALTERNATIVE_CLAUSES: dict[str, Callable[[T.Node], Clause]] = {
    "elseif_statement": ElseifClause.from_cst,
    "else_statement": ElseClause.from_cst,
}


@D.dataclass
class If(AST):
    clauses: list[Clause]

    def __post_init__(self):
        assert len(self.clauses) > 0, "A conditional has at least one clause"

    @staticmethod
    def from_cst(node: T.Node) -> "If":
        assert node.type == "if_statement"

        # The `if` clause has no CST node of its own. It runs from the `if` keyword
        # to the end of its consequence, or the `then` keyword if there is none.
        *_, last = takewhile(
            lambda child: child.type not in ["end", *ALTERNATIVE_CLAUSES],
            node.children,
        )

        if_clause = IfClause(
            location=SourceLocation(
                position_of(node.start_point),
                position_of(last.end_point),
            ),
            body=body_of(node, skipped=ALTERNATIVE_CLAUSES),
        )

        return If(
            location=location_of(node),
            clauses=[if_clause]
            + [
                ALTERNATIVE_CLAUSES[child.type](child)
                for child in node.named_children
                if child.type in ALTERNATIVE_CLAUSES
            ],
        )

    AST.register(from_cst, "if_statement")


@D.dataclass
class Unknown(AST):
    """Any other construct, keeping only its non-leaf descendants."""

    node_type: str
    body: list[AST] = D.field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return len(self.body) == 0

    @staticmethod
    def from_cst(node: T.Node) -> "Unknown":
        return Unknown(
            location=location_of(node),
            node_type=node.type,
            body=[
                child
                for child_node in strip_comments(node.named_children)
                if not (child := AST.from_cst(child_node)).is_leaf
            ],
        )


@D.dataclass
class ErrorAST(AST):
    node_type: str

    @staticmethod
    def from_cst(node: T.Node) -> "ErrorAST":
        return ErrorAST(location_of(node), node.type)


AST.register(Chunk.from_cst, "chunk")


ESCAPES = str.maketrans({"\n": r"\n", "\t": r"\t", "\r": r"\r", '"': r"\""})


def quote(text: str, limit: int = 50) -> str:
    """Quotes a string on a single line, truncating it after `limit` characters."""
    quoted = f'"{text[:limit].translate(ESCAPES)}"'
    dropped = len(text) - limit
    return quoted if dropped <= 0 else f"{quoted} (+{dropped} characters)"


@D.dataclass(repr=False)
class PrettyAST(PrettyTree):
    """Renders a Lua AST with one child line per non-empty field."""

    node: Any
    label: str | None = None

    def describe(self) -> str:
        match self.node:
            case AST() | Comment() as node:
                return f"{type(node).__name__} [{node.location}]"
            case [_, *_]:
                # Elements are rendered as child nodes.
                return "[...]"
            case str() as text:
                return quote(text)
            case value:
                return str(value)

    def children(self) -> list[PrettyTree]:
        match self.node:
            case AST() | Comment() as node:
                return [
                    PrettyAST(value, name)
                    for name, value in self.non_empty_fields(node)
                    if name != "location"
                ]
            case [*elements]:
                return [PrettyAST(e, f"[{i}]") for i, e in enumerate(elements)]
            case _:
                return []


@D.dataclass(repr=False)
class PrettyCST(PrettyTree):
    """Renders a tree-sitter CST, labeling children with their field names."""

    node: T.Node
    label: str | None = None

    def describe(self) -> str:
        node = self.node
        # Anonymous tokens are shown by their text.
        text = quote(node.text.decode()) if not node.is_named and node.text else None
        return f"{text or node.type} [{location_of(node)}]"

    def children(self) -> list[PrettyTree]:
        return [
            PrettyCST(child, self.node.field_name_for_child(i))
            for i, child in enumerate(self.node.children)
        ]
