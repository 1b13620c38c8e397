"""Statistics of a parsed SFC document."""

import logging

from ..models import Element, Statistics

log = logging.getLogger(__name__)


class StatisticsAggregator:
    """Accumulates type counts and the bounding box of one parse.

    Type counts are updated once per matched record, before any transform.
    The bounding box is updated once per placed element, so the range is
    always in drawing coordinates.
    """

    def __init__(self) -> None:
        self.statistics = Statistics()

    def count(self, type_name: str) -> None:
        counts = self.statistics.element_type_counts
        counts[type_name] = counts.get(type_name, 0) + 1
        self.statistics.total_elements += 1

    def include(self, element: Element) -> None:
        self.statistics.coordinate_range.include_all(element.data.points())

    def summary(self) -> str:
        return format_summary(self.statistics)


def format_summary(statistics: Statistics) -> str:
    """Human readable summary of the statistics."""
    type_summary = ", ".join(f"{name}: {count}" for name, count in statistics.element_type_counts.items())
    coord_range = statistics.coordinate_range
    if coord_range.is_empty:
        range_summary = "n/a"
    else:
        range_summary = (
            f"X({coord_range.min_x:.2f} ~ {coord_range.max_x:.2f}), "
            f"Y({coord_range.min_y:.2f} ~ {coord_range.max_y:.2f})"
        )
    return "\n".join(
        [
            f"Total elements: {statistics.total_elements}",
            f"Element types: {type_summary or 'none'}",
            f"Coordinate range: {range_summary}",
        ]
    )
