from .folding_range_provider import FoldingRangeProvider
from .folding_region_provider import FoldingRegion, FoldingRegionProvider
from .tab_line_number_provider import TabLineNumber, TabLineNumberProvider

__all__ = [
    "FoldingRangeProvider",
    "FoldingRegion",
    "FoldingRegionProvider",
    "TabLineNumber",
    "TabLineNumberProvider",
]
