import logging
import sys
from enum import StrEnum
from pathlib import Path
from textwrap import dedent
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from picols.ast import Chunk, PrettyAST, PrettyCST
from picols.document_model import DocumentIndex
from picols.parsing import parse_lua
from picols.server import server

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

logging.basicConfig(
    filename="/tmp/picols.log",
    filemode="w",
    level=logging.DEBUG,
)


SourcePath = Annotated[
    Path,
    typer.Argument(
        help="The PICO-8 cartridge or Lua file to read.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        writable=False,
        allow_dash=True,
    ),
]


def read_source(path: Path) -> tuple[str, str]:
    if path == Path("-"):
        return "/dev/stdin", sys.stdin.read()
    else:
        return path.absolute().as_uri(), path.read_text("utf-8")


@app.command()
def serve():
    server.start_io()


class TreeType(StrEnum):
    Lua = "l"
    TreeSitter = "t"


@app.command()
def tree(
    path: SourcePath,
    tree_type: Annotated[
        TreeType,
        typer.Option(
            "-t",
            "--tree-type",
            help=dedent(
                """\
                The type of tree to print:
                - `l`: The Lua AST
                - `t`: The tree-sitter CST
                """
            ),
        ),
    ] = TreeType.Lua,
):
    _, source = read_source(path)
    cst = parse_lua(source)

    match tree_type:
        case TreeType.Lua:
            tree = PrettyAST(Chunk.from_cst(cst))
        case TreeType.TreeSitter:
            tree = PrettyCST(cst)

    Console(markup=False).print(tree)


@app.command()
def fold(path: SourcePath):
    """Prints the folding ranges of a document, sorted by line."""
    uri, source = read_source(path)
    doc = DocumentIndex(uri, source)

    table = Table("Start", "End", "Kind", "Name", title=uri)
    for r in doc.folding_ranges:
        table.add_row(
            str(r.start_line),
            str(r.end_line),
            "" if r.kind is None else r.kind.value,
            r.collapsed_text or "",
        )

    Console(markup=False).print(table)


@app.command()
def lines(path: SourcePath):
    """Prints every line of the `__lua__` section with its line number in its tab."""
    uri, source = read_source(path)
    doc = DocumentIndex(uri, source)

    table = Table("Line", "In tab", "Text", title=uri)
    for line_number in doc.tab_line_numbers:
        line = line_number.range.start.line
        table.add_row(str(line), str(line_number.line_in_tab), doc.lines[line])

    Console(markup=False).print(table)


if __name__ == "__main__":
    app()
