import lsprotocol.types as L

from picols.ast import (
    AST,
    Chunk,
    Do,
    ForGeneric,
    ForNumeric,
    Function,
    If,
    Repeat,
    While,
)
from picols.visitor import Visitor


class FoldingRangeProvider(Visitor):
    """Folds compound statements: conditional clauses, loops, and function bodies.

    Ranges are emitted in pre-order, i.e., an enclosing construct comes before the
    constructs nested in it.
    """

    def __init__(self) -> None:
        self.folding_ranges: list[L.FoldingRange] = []

    def serve(self, tree: Chunk) -> list[L.FoldingRange]:
        self.visit(tree)
        return self.folding_ranges

    def _add_folding_range(self, start_line: int, end_line: int):
        # LSP lines are 0-based while AST lines are 1-based.
        start, end = start_line - 1, end_line - 1

        if start < end:
            self.folding_ranges.append(L.FoldingRange(start_line=start, end_line=end))

    def _fold_block(self, e: AST):
        if e.location is not None:
            self._add_folding_range(e.location.start.line, e.location.end.line)

    def visit_if(self, e: If):
        if e.location is not None:
            for i, clause in enumerate(e.clauses):
                if clause.location is None:
                    continue

                next_clause = e.clauses[i + 1] if i + 1 < len(e.clauses) else None

                if next_clause is not None and next_clause.location is not None:
                    # Ends right above the keyword of the next clause.
                    end_line = next_clause.location.start.line - 1
                else:
                    # Ends right above the closing `end` keyword.
                    end_line = e.location.end.line - 1

                self._add_folding_range(clause.location.start.line, end_line)

        super().visit_if(e)

    def visit_while(self, e: While):
        self._fold_block(e)
        super().visit_while(e)

    def visit_do(self, e: Do):
        self._fold_block(e)
        super().visit_do(e)

    def visit_repeat(self, e: Repeat):
        self._fold_block(e)
        super().visit_repeat(e)

    def visit_for_numeric(self, e: ForNumeric):
        self._fold_block(e)
        super().visit_for_numeric(e)

    def visit_for_generic(self, e: ForGeneric):
        self._fold_block(e)
        super().visit_for_generic(e)

    def visit_function(self, e: Function):
        self._fold_block(e)
        super().visit_function(e)
