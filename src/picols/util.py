from typing import Iterable, TypeVar

T = TypeVar("T")


def head_or_none(values: Iterable[T]) -> T | None:
    return next(iter(values), None)


def utf16_length(text: str) -> int:
    """Returns the length of a string in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2
