"""Tests for the entity interpreter."""

import pytest

from sfcto.models import (
    PAPER_LEVEL_NAME,
    UNNAMED_LEVEL_NAME,
    ArcData,
    ColourData,
    DrawingSheetData,
    FontData,
    GroupMarkerData,
    LineData,
    LocateData,
    Point2D,
    PointData,
    PolylineData,
    Record,
    TextData,
    TransformParams,
    UnknownData,
    WidthData,
)
from sfcto.process.interpreter import interpret_record, normalize_level_name
from sfcto.process.parameters import split_parameters


def make_record(type_name: str, params: str, record_id: int = 10) -> Record:
    return Record(id=record_id, type_name=type_name, tokens=tuple(split_parameters(params)))


class TestNormalizeLevelName:
    """Test normalize_level_name function."""

    def test_paper_level_prefix(self):
        assert normalize_level_name("'$$ATRU$$1$$背景色$$色$$255_255_255'") == PAPER_LEVEL_NAME

    @pytest.mark.parametrize("name", ["''", "'0'", "0", "  ", "' 0 '"])
    def test_unnamed_level(self, name):
        assert normalize_level_name(name) == UNNAMED_LEVEL_NAME

    @pytest.mark.parametrize("name", ["'00'", "'0.0'", "'10'"])
    def test_only_exact_zero_is_unnamed(self, name):
        assert normalize_level_name(name) == name.strip("'")

    def test_regular_name(self):
        assert normalize_level_name(" '傾きあり' ") == "傾きあり"


class TestInterpretLine:
    def test_line_coordinate_order(self):
        """Token order is x1, x2, y1, y2."""
        element = interpret_record(make_record("line_feature", "'1','2','3','4','0','10','5','7'"))
        assert element is not None
        data = element.data
        assert isinstance(data, LineData)
        assert (data.layer, data.color, data.line_type, data.pen) == ("1", "2", "3", "4")
        assert data.start == Point2D(x=0, y=5)
        assert data.end == Point2D(x=10, y=7)

    @pytest.mark.parametrize(
        "params",
        [
            "'1','1','1','1','abc','10','0','0'",
            "'1','1','1','1','0','10','0'",
            "'1','1','1','1','0','nan','0','0'",
            "'1','1','1','1','0','inf','0','0'",
        ],
    )
    def test_line_rejected(self, params):
        assert interpret_record(make_record("line_feature", params)) is None


class TestInterpretArc:
    def test_arc_with_radius_and_angles(self):
        element = interpret_record(make_record("arc_feature", "'1','2','1','5','5.0','6.0','2.5','1','0.0','90.0'"))
        assert element is not None
        data = element.data
        assert isinstance(data, ArcData)
        assert data.center == Point2D(x=5, y=6)
        assert data.radius == 2.5
        assert data.direction == 1
        assert data.start_angle == 0.0
        assert data.end_angle == 90.0

    def test_arc_without_radius(self):
        element = interpret_record(make_record("arc_feature", "'1','2','1','5','5.0','6.0'"))
        assert element is not None
        assert element.data.radius is None

    def test_arc_rejected(self):
        assert interpret_record(make_record("arc_feature", "'1','2','1','5','x','6.0','2.5'")) is None


class TestInterpretPoint:
    def test_positional_point(self):
        element = interpret_record(make_record("CARTESIAN_POINT", "'1.5','2.5'"))
        assert element is not None
        assert element.data == PointData(point=Point2D(x=1.5, y=2.5))

    def test_step_point(self):
        element = interpret_record(make_record("CARTESIAN_POINT", "'',(3.0,4.0)"))
        assert element is not None
        assert element.data == PointData(point=Point2D(x=3.0, y=4.0))

    def test_point_rejected(self):
        assert interpret_record(make_record("CARTESIAN_POINT", "'a','b'")) is None


class TestInterpretPolyline:
    def test_pairs_vertices(self):
        params = "'1','1','1','1','3',(0.0,10.0,20.0),(0.0,5.0,0.0)"
        element = interpret_record(make_record("polyline_feature", params))
        assert element is not None
        data = element.data
        assert isinstance(data, PolylineData)
        assert data.vertices == (Point2D(x=0, y=0), Point2D(x=10, y=5), Point2D(x=20, y=0))

    def test_shorter_list_and_invalid_pairs(self):
        params = "'1','1','1','1','4',(0.0,x,20.0,30.0),(1.0,2.0,3.0)"
        element = interpret_record(make_record("polyline_feature", params))
        assert element is not None
        assert element.data.vertices == (Point2D(x=0, y=1), Point2D(x=20, y=3))

    def test_missing_lists(self):
        assert interpret_record(make_record("polyline_feature", "'1','1','1','1','3'")) is None


class TestInterpretText:
    def test_text_anchor(self):
        params = "'1','2','3','テキスト','1.0','2.0','3.5','3.0','0.0','45.0','0.0','1','1'"
        element = interpret_record(make_record("text_string_feature", params))
        assert element is not None
        data = element.data
        assert isinstance(data, TextData)
        assert data.text == "テキスト"
        assert data.anchor == Point2D(x=1, y=2)
        assert data.height == 3.5
        assert data.angle == 45.0

    def test_text_rejected(self):
        assert interpret_record(make_record("text_string_feature", "'1','2','3','t','x','2.0'")) is None


class TestInterpretLevelRecords:
    def test_group_marker(self):
        element = interpret_record(make_record("sfig_org_feature", "'傾きあり','2'"))
        assert element is not None
        assert element.data == GroupMarkerData(name="傾きあり", sequence="2")

    def test_group_marker_paper_level(self):
        element = interpret_record(make_record("sfig_org_feature", "'$$ATRU$$1','3'"))
        assert element is not None
        assert element.data.name == PAPER_LEVEL_NAME

    def test_locate(self):
        params = "'0','L1','-30000.0','10000.0','0.0','0.001','0.002'"
        element = interpret_record(make_record("sfig_locate_feature", params))
        assert element is not None
        assert element.data == LocateData(
            name="L1", transform=TransformParams(x0=-30000.0, y0=10000.0, a=0.0, xs=0.001, ys=0.002)
        )

    @pytest.mark.parametrize(
        "params",
        [
            "'0','L1','x','0','0','1','1'",
            "'0','L1','0','0','0','1','abc'",
            "'0','L1','0','0','0','1'",
        ],
    )
    def test_locate_rejected(self, params):
        assert interpret_record(make_record("sfig_locate_feature", params)) is None

    def test_locate_zero_scale_is_kept(self):
        """Validation of the transform happens when the level is finalized."""
        element = interpret_record(make_record("sfig_locate_feature", "'0','L1','0','0','0','0','1'"))
        assert element is not None
        assert element.data.transform.xs == 0


class TestInterpretAttributes:
    def test_drawing_sheet(self):
        element = interpret_record(make_record("drawing_sheet_feature", "'A3','9','1','420','297'"))
        assert element is not None
        assert element.data == DrawingSheetData(title="A3", width=420.0, height=297.0)

    def test_width(self):
        element = interpret_record(make_record("width_feature", "'0.35'"))
        assert element is not None
        assert element.data == WidthData(width=0.35)

    def test_font(self):
        element = interpret_record(make_record("text_font_feature", "'ＭＳ ゴシック'"))
        assert element is not None
        assert element.data == FontData(font_name="ＭＳ ゴシック")

    def test_colour(self):
        element = interpret_record(make_record("user_defined_colour_feature", "'255','128','0'"))
        assert element is not None
        assert element.data == ColourData(r=255, g=128, b=0)
        assert not element.data.has_geometry

    def test_unknown_type_is_kept(self):
        element = interpret_record(make_record("clothoid_feature", "'1','2'", record_id=42))
        assert element is not None
        assert element.id == 42
        assert element.data == UnknownData(tokens=("'1'", "'2'"))
        assert element.data.points() == []
