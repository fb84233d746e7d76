import dataclasses as D
from typing import Any, Iterator

from rich.text import Text
from rich.tree import Tree


class PrettyTree:
    """An abstract class for pretty-printing tree-like structures.

    Trees are rendered as plain ASCII art by `repr()`, which keeps test
    expectations readable, and as a `rich.tree.Tree` when printed to a rich
    console. A node is shown as `label=description`, or only its description if it
    has no label.
    """

    label: str | None = None

    def describe(self) -> str:
        """Returns a single-line description of a tree node, without its label."""
        ...

    def children(self) -> list["PrettyTree"]:
        """Returns a list of child nodes."""
        ...

    def node_text(self) -> str:
        description = self.describe()
        return description if self.label is None else f"{self.label}={description}"

    @staticmethod
    def non_empty_fields(node: Any) -> list[tuple[str, Any]]:
        """Returns names and values of the non-empty fields of a dataclass instance.

        A field is non-empty if its value is neither `None` nor an empty list.
        """
        assert D.is_dataclass(node)
        return [
            (f.name, v)
            for f in D.fields(node)
            if (v := getattr(node, f.name)) is not None
            if not isinstance(v, list) or len(v) > 0
        ]

    def lines(self, branches: str = "") -> Iterator[str]:
        """Yields the rendered lines of all descendants, depth first."""
        children = self.children()

        for i, child in enumerate(children):
            last_child = i == len(children) - 1
            fork = "`-- " if last_child else "|-- "
            new_branch = ".   " if last_child else "|   "

            yield f"{branches}{fork}{child.node_text()}"
            yield from child.lines(branches + new_branch)

    def __rich__(self) -> Tree:
        def grow(tree: Tree, node: PrettyTree):
            for child in node.children():
                grow(tree.add(Text(child.node_text())), child)

        root = Tree(Text(self.node_text()))
        grow(root, self)
        return root

    def __repr__(self):
        return "\n".join([self.node_text(), *self.lines()])
