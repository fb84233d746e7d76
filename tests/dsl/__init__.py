from .fake_document import FakeDocument, Fold
from .util import side_by_side

__all__ = [
    "FakeDocument",
    "Fold",
    "side_by_side",
]
