"""Interpretation of SFC records into typed element data.

Each supported feature type has its own extraction function which reads
the parameter tokens at fixed positions. Records whose required numeric
fields cannot be read are rejected (None) instead of being partially
populated.
"""

import logging
from collections.abc import Callable

from ..models import (
    PAPER_LEVEL_NAME,
    PAPER_LEVEL_PREFIX,
    UNNAMED_LEVEL_NAME,
    ArcData,
    ColourData,
    DrawingSheetData,
    ElementData,
    FontData,
    GroupMarkerData,
    LineData,
    LocateData,
    NativeElement,
    Point2D,
    PointData,
    PolylineData,
    Record,
    TextData,
    TransformParams,
    UnknownData,
    WidthData,
    to_float,
    to_int,
)
from .parameters import split_list, unquote

log = logging.getLogger(__name__)

LINE_FEATURE = "line_feature"
ARC_FEATURE = "arc_feature"
CARTESIAN_POINT = "CARTESIAN_POINT"
POLYLINE_FEATURE = "polyline_feature"
TEXT_STRING_FEATURE = "text_string_feature"
SFIG_ORG_FEATURE = "sfig_org_feature"
SFIG_LOCATE_FEATURE = "sfig_locate_feature"
DRAWING_SHEET_FEATURE = "drawing_sheet_feature"
WIDTH_FEATURE = "width_feature"
TEXT_FONT_FEATURE = "text_font_feature"
USER_DEFINED_COLOUR_FEATURE = "user_defined_colour_feature"


def normalize_level_name(name: str) -> str:
    """Normalize a level (layer) name token.

    ``$$ATRU$$...`` names denote the paper level, an empty name or the
    exact literal ``0`` denotes an unnamed level. Other names are returned
    without quotes and surrounding whitespace.
    """
    trimmed = unquote(name)
    if trimmed.startswith(PAPER_LEVEL_PREFIX):
        return PAPER_LEVEL_NAME
    if not trimmed or trimmed == "0":
        return UNNAMED_LEVEL_NAME
    return trimmed


def _token(tokens: tuple[str, ...], index: int) -> str:
    if index >= len(tokens):
        return ""
    return unquote(tokens[index])


def _number(tokens: tuple[str, ...], index: int) -> float | None:
    return to_float(_token(tokens, index).strip("()"))


def interpret_line(tokens: tuple[str, ...]) -> LineData | None:
    # Token order is x1, x2, y1, y2
    x1, x2, y1, y2 = (_number(tokens, index) for index in range(4, 8))
    if x1 is None or x2 is None or y1 is None or y2 is None:
        return None
    return LineData(
        layer=_token(tokens, 0),
        color=_token(tokens, 1),
        line_type=_token(tokens, 2),
        pen=_token(tokens, 3),
        start=Point2D(x=x1, y=y1),
        end=Point2D(x=x2, y=y2),
    )


def interpret_arc(tokens: tuple[str, ...]) -> ArcData | None:
    center_x = _number(tokens, 4)
    center_y = _number(tokens, 5)
    if center_x is None or center_y is None:
        return None
    return ArcData(
        layer=_token(tokens, 0),
        color=_token(tokens, 1),
        line_type=_token(tokens, 2),
        pen=_token(tokens, 3),
        center=Point2D(x=center_x, y=center_y),
        radius=_number(tokens, 6),
        direction=to_int(_token(tokens, 7)),
        start_angle=_number(tokens, 8),
        end_angle=_number(tokens, 9),
    )


def interpret_point(tokens: tuple[str, ...]) -> PointData | None:
    x = _number(tokens, 0)
    y = _number(tokens, 1)
    if x is None or y is None:
        # STEP form: CARTESIAN_POINT('name',(x,y))
        coordinates = next((split_list(token) for token in tokens if token.startswith("(")), [])
        if len(coordinates) < 2:
            return None
        x, y = to_float(coordinates[0]), to_float(coordinates[1])
    if x is None or y is None:
        return None
    return PointData(point=Point2D(x=x, y=y))


def interpret_polyline(tokens: tuple[str, ...]) -> PolylineData | None:
    if len(tokens) < 7:
        return None
    x_values = [to_float(value) for value in split_list(tokens[5])]
    y_values = [to_float(value) for value in split_list(tokens[6])]
    vertices = []
    for x, y in zip(x_values, y_values, strict=False):
        if x is None or y is None:
            continue
        vertices.append(Point2D(x=x, y=y))
    log.debug(f"polyline_feature with {len(vertices)} vertices")
    return PolylineData(
        layer=_token(tokens, 0),
        color=_token(tokens, 1),
        line_type=_token(tokens, 2),
        pen=_token(tokens, 3),
        vertices=tuple(vertices),
    )


def interpret_text(tokens: tuple[str, ...]) -> TextData | None:
    x = _number(tokens, 4)
    y = _number(tokens, 5)
    if x is None or y is None:
        return None
    return TextData(
        layer=_token(tokens, 0),
        color=_token(tokens, 1),
        font=_token(tokens, 2),
        text=_token(tokens, 3),
        anchor=Point2D(x=x, y=y),
        height=_number(tokens, 6),
        width=_number(tokens, 7),
        angle=_number(tokens, 9),
    )


def interpret_group_marker(tokens: tuple[str, ...]) -> GroupMarkerData:
    name = tokens[0] if tokens else ""
    return GroupMarkerData(name=normalize_level_name(name), sequence=_token(tokens, 1))


def interpret_locate(tokens: tuple[str, ...]) -> LocateData | None:
    if len(tokens) < 7:
        log.warning(f"sfig_locate_feature with {len(tokens)} parameters skipped")
        return None
    values = [_number(tokens, index) for index in range(2, 7)]
    x0, y0, a, xs, ys = values
    if x0 is None or y0 is None or a is None or xs is None or ys is None:
        log.warning(f"sfig_locate_feature '{_token(tokens, 1)}' with non numeric values skipped")
        return None
    name = normalize_level_name(tokens[1])
    log.debug(f"Transform declaration for level '{name}'")
    return LocateData(name=name, transform=TransformParams(x0=x0, y0=y0, a=a, xs=xs, ys=ys))


def interpret_drawing_sheet(tokens: tuple[str, ...]) -> DrawingSheetData | None:
    width = _number(tokens, 3)
    height = _number(tokens, 4)
    if width is None or height is None:
        return None
    return DrawingSheetData(title=_token(tokens, 0), width=width, height=height)


def interpret_width(tokens: tuple[str, ...]) -> WidthData | None:
    width = _number(tokens, 0)
    if width is None:
        return None
    return WidthData(width=width)


def interpret_font(tokens: tuple[str, ...]) -> FontData | None:
    if not tokens:
        return None
    return FontData(font_name=_token(tokens, 0))


def interpret_colour(tokens: tuple[str, ...]) -> ColourData | None:
    r, g, b = (to_int(_token(tokens, index)) for index in range(3))
    if r is None or g is None or b is None:
        return None
    return ColourData(r=r, g=g, b=b)


Interpreter = Callable[[tuple[str, ...]], ElementData | None]

INTERPRETERS: dict[str, Interpreter] = {
    LINE_FEATURE: interpret_line,
    ARC_FEATURE: interpret_arc,
    CARTESIAN_POINT: interpret_point,
    POLYLINE_FEATURE: interpret_polyline,
    TEXT_STRING_FEATURE: interpret_text,
    SFIG_ORG_FEATURE: interpret_group_marker,
    SFIG_LOCATE_FEATURE: interpret_locate,
    DRAWING_SHEET_FEATURE: interpret_drawing_sheet,
    WIDTH_FEATURE: interpret_width,
    TEXT_FONT_FEATURE: interpret_font,
    USER_DEFINED_COLOUR_FEATURE: interpret_colour,
}


def interpret_record(record: Record) -> NativeElement | None:
    """Interpret a record into a native element.

    Parameters
    ----------
    record : Record
        Tokenized record of the DATA section

    Returns
    -------
    NativeElement | None
        Element with its typed data, None if a required field is invalid.
        Unsupported types are kept with ``UnknownData``.
    """
    interpreter = INTERPRETERS.get(record.type_name)
    if interpreter is None:
        return NativeElement(id=record.id, type_name=record.type_name, data=UnknownData(tokens=record.tokens))
    data = interpreter(record.tokens)
    if data is None:
        log.debug(f"Rejected #{record.id} {record.type_name}: invalid parameters {record.tokens}")
        return None
    return NativeElement(id=record.id, type_name=record.type_name, data=data)
