"""Tests for the statistics aggregator."""

from sfcto.models import CoordinateRange, Element, LineData, Point2D, Statistics, WidthData
from sfcto.process.statistics import StatisticsAggregator, format_summary


def make_line(start: Point2D, end: Point2D) -> Element:
    return Element(
        id=1,
        type_name="line_feature",
        data=LineData("1", "1", "1", "1", start, end),
        level_id="level_0",
    )


class TestStatisticsAggregator:
    def test_initial_range_is_empty(self):
        aggregator = StatisticsAggregator()
        coord_range = aggregator.statistics.coordinate_range
        assert coord_range.is_empty
        assert coord_range.to_dict() == {"min_x": None, "max_x": None, "min_y": None, "max_y": None}

    def test_count_types(self):
        aggregator = StatisticsAggregator()
        for type_name in ["line_feature", "arc_feature", "line_feature"]:
            aggregator.count(type_name)
        assert aggregator.statistics.total_elements == 3
        assert aggregator.statistics.element_type_counts == {"line_feature": 2, "arc_feature": 1}

    def test_include_coordinates(self):
        aggregator = StatisticsAggregator()
        aggregator.include(make_line(Point2D(x=-5, y=2), Point2D(x=10, y=-1)))
        coord_range = aggregator.statistics.coordinate_range
        assert (coord_range.min_x, coord_range.max_x) == (-5, 10)
        assert (coord_range.min_y, coord_range.max_y) == (-1, 2)

    def test_attribute_data_leaves_range_empty(self):
        aggregator = StatisticsAggregator()
        aggregator.include(Element(id=2, type_name="width_feature", data=WidthData(width=0.5), level_id="level_0"))
        assert aggregator.statistics.coordinate_range.is_empty

    def test_non_finite_points_ignored(self):
        coord_range = CoordinateRange()
        coord_range.include(Point2D(x=float("nan"), y=1.0))
        assert coord_range.is_empty


class TestFormatSummary:
    def test_summary(self):
        aggregator = StatisticsAggregator()
        aggregator.count("line_feature")
        aggregator.include(make_line(Point2D(x=0, y=0), Point2D(x=10, y=5)))
        summary = aggregator.summary()
        assert "Total elements: 1" in summary
        assert "line_feature: 1" in summary
        assert "X(0.00 ~ 10.00), Y(0.00 ~ 5.00)" in summary

    def test_empty_summary(self):
        summary = format_summary(Statistics())
        assert "Total elements: 0" in summary
        assert "Element types: none" in summary
        assert "Coordinate range: n/a" in summary
