from picols.ast import (
    AST,
    Chunk,
    Clause,
    Do,
    ErrorAST,
    ForGeneric,
    ForNumeric,
    Function,
    If,
    Repeat,
    Unknown,
    While,
)


class Visitor:
    def visit(self, tree: AST):
        match tree:
            case Chunk():
                self.visit_chunk(tree)
            case If():
                self.visit_if(tree)
            case While():
                self.visit_while(tree)
            case Do():
                self.visit_do(tree)
            case Repeat():
                self.visit_repeat(tree)
            case ForNumeric():
                self.visit_for_numeric(tree)
            case ForGeneric():
                self.visit_for_generic(tree)
            case Function():
                self.visit_function(tree)
            case Unknown():
                self.visit_unknown(tree)
            case ErrorAST():
                self.visit_error(tree)

    def visit_body(self, body: list[AST]):
        for statement in body:
            self.visit(statement)

    def visit_chunk(self, e: Chunk):
        self.visit_body(e.body)

    def visit_if(self, e: If):
        for c in e.clauses:
            self.visit_clause(c)

    def visit_clause(self, c: Clause):
        self.visit_body(c.body)

    def visit_while(self, e: While):
        self.visit_body(e.body)

    def visit_do(self, e: Do):
        self.visit_body(e.body)

    def visit_repeat(self, e: Repeat):
        self.visit_body(e.body)

    def visit_for_numeric(self, e: ForNumeric):
        self.visit_body(e.body)

    def visit_for_generic(self, e: ForGeneric):
        self.visit_body(e.body)

    def visit_function(self, e: Function):
        self.visit_body(e.body)

    def visit_unknown(self, e: Unknown):
        self.visit_body(e.body)

    def visit_error(self, e: ErrorAST):
        del e
