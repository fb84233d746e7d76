from rich.text import Text


def side_by_side(
    expected: Text | str,
    actual: Text | str,
    titles: tuple[str, str] = ("expected", "actual"),
) -> Text:
    """Renders two texts next to each other, e.g. for assertion messages."""
    lhs, rhs = (
        Text(text) if isinstance(text, str) else text for text in (expected, actual)
    )

    # `Text.split()` returns a `Lines` container rather than a list.
    lhs_lines = [Text.styled(titles[0], "bold"), *lhs.split()]
    rhs_lines = [Text.styled(titles[1], "bold"), *rhs.split()]

    empty = Text.styled("", "default")
    shorter = lhs_lines if len(lhs_lines) < len(rhs_lines) else rhs_lines
    shorter.extend([empty] * abs(len(lhs_lines) - len(rhs_lines)))

    width = max(len(line) for line in lhs_lines)
    sep = Text.styled(" : ", "grey50")

    return Text("\n").join(
        [
            lhs_line + " " * (width - len(lhs_line)) + sep + rhs_line
            for lhs_line, rhs_line in zip(lhs_lines, rhs_lines)
        ]
    )
