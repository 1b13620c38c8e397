"""Data models for SXF (SFC) parsing.

This module contains the dataclasses that represent what is read from an
SFC file: the records of the DATA section, the typed element data, the
levels (drawing layers) with their coordinate transform and the parsed
document with its statistics.
"""

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any, TypeGuard

import numpy as np

log = logging.getLogger(__name__)

PAPER_LEVEL_NAME = "用紙レベル"
UNNAMED_LEVEL_NAME = "無名レベル"
PAPER_LEVEL_PREFIX = "$$ATRU$$"


def is_float(val: Any) -> TypeGuard[float]:
    """Check if val can be read as a finite float."""
    if isinstance(val, bool):
        return False
    if isinstance(val, (int | float)):
        return math.isfinite(val)
    if not isinstance(val, str):
        val = str(val)
    try:
        return math.isfinite(float(val))
    except ValueError:
        return False


def to_float(val: Any) -> float | None:
    """Convert value to a finite float or None."""
    if not is_float(val):
        return None
    return float(val)


def to_int(val: Any) -> int | None:
    """Convert value to int or None."""
    value = to_float(val)
    if value is None:
        return None
    return int(value)


@dataclass(frozen=True)
class Point2D:
    """A 2D coordinate, either native SXF or drawing space."""

    x: float
    y: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    def __eq__(self, value: object, /) -> bool:
        if not isinstance(value, Point2D):
            return False
        return bool(np.isclose(self.x, value.x) and np.isclose(self.y, value.y))

    def __hash__(self) -> int:
        return hash((self.x, self.y))


PointMapper = Callable[[Point2D], Point2D]


@dataclass(frozen=True)
class Record:
    """One ``#id = TYPE(params)`` line of the DATA section."""

    id: int
    type_name: str
    tokens: tuple[str, ...]
    line_index: int = -1


@dataclass(frozen=True)
class TransformParams:
    """Affine transform of a level into the drawing coordinate space.

    Parameters
    ----------
    x0, y0 : float
        Origin of the level in drawing coordinates
    a : float
        Rotation in degrees
    xs, ys : float
        Scale factors in X and Y
    """

    x0: float = 0.0
    y0: float = 0.0
    a: float = 0.0
    xs: float = 1.0
    ys: float = 1.0

    def to_dict(self) -> dict[str, float]:
        return {"x0": self.x0, "y0": self.y0, "a": self.a, "xs": self.xs, "ys": self.ys}


IDENTITY_TRANSFORM = TransformParams()


class ElementData:
    """Base class of the typed element data.

    Only coordinate-bearing variants override ``points`` and ``transformed``.
    """

    kind = "unknown"

    def points(self) -> list[Point2D]:
        """Coordinates carried by this data."""
        return []

    def transformed(self, mapper: PointMapper) -> "ElementData":
        """Copy with every coordinate mapped through ``mapper``."""
        return self

    @property
    def has_geometry(self) -> bool:
        return len(self.points()) > 0

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class LineData(ElementData):
    layer: str
    color: str
    line_type: str
    pen: str
    start: Point2D
    end: Point2D

    kind = "line"

    def points(self) -> list[Point2D]:
        return [self.start, self.end]

    def transformed(self, mapper: PointMapper) -> "LineData":
        return replace(self, start=mapper(self.start), end=mapper(self.end))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "layer": self.layer,
            "color": self.color,
            "line_type": self.line_type,
            "pen": self.pen,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }


@dataclass(frozen=True)
class ArcData(ElementData):
    layer: str
    color: str
    line_type: str
    pen: str
    center: Point2D
    radius: float | None = None
    direction: int | None = None
    start_angle: float | None = None
    end_angle: float | None = None

    kind = "arc"

    def points(self) -> list[Point2D]:
        return [self.center]

    def transformed(self, mapper: PointMapper) -> "ArcData":
        return replace(self, center=mapper(self.center))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "layer": self.layer,
            "color": self.color,
            "center": self.center.to_dict(),
            "radius": self.radius,
            "direction": self.direction,
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
        }


@dataclass(frozen=True)
class PointData(ElementData):
    point: Point2D

    kind = "point"

    def points(self) -> list[Point2D]:
        return [self.point]

    def transformed(self, mapper: PointMapper) -> "PointData":
        return replace(self, point=mapper(self.point))

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self.point.to_dict()}


@dataclass(frozen=True)
class PolylineData(ElementData):
    layer: str
    color: str
    line_type: str
    pen: str
    vertices: tuple[Point2D, ...]

    kind = "polyline"

    def points(self) -> list[Point2D]:
        return list(self.vertices)

    def transformed(self, mapper: PointMapper) -> "PolylineData":
        return replace(self, vertices=tuple(mapper(vertex) for vertex in self.vertices))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "layer": self.layer,
            "color": self.color,
            "line_type": self.line_type,
            "pen": self.pen,
            "vertices": [vertex.to_dict() for vertex in self.vertices],
        }


@dataclass(frozen=True)
class TextData(ElementData):
    layer: str
    color: str
    font: str
    text: str
    anchor: Point2D
    height: float | None = None
    width: float | None = None
    angle: float | None = None

    kind = "text"

    def points(self) -> list[Point2D]:
        return [self.anchor]

    def transformed(self, mapper: PointMapper) -> "TextData":
        return replace(self, anchor=mapper(self.anchor))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "layer": self.layer,
            "color": self.color,
            "font": self.font,
            "text": self.text,
            "anchor": self.anchor.to_dict(),
            "height": self.height,
            "width": self.width,
            "angle": self.angle,
        }


@dataclass(frozen=True)
class DrawingSheetData(ElementData):
    title: str
    width: float
    height: float

    kind = "drawing_sheet"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "title": self.title, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class WidthData(ElementData):
    width: float

    kind = "width"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "width": self.width}


@dataclass(frozen=True)
class FontData(ElementData):
    font_name: str

    kind = "font"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "font_name": self.font_name}


@dataclass(frozen=True)
class ColourData(ElementData):
    r: int
    g: int
    b: int

    kind = "colour"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "r": self.r, "g": self.g, "b": self.b}


@dataclass(frozen=True)
class GroupMarkerData(ElementData):
    """Boundary marker closing the preceding group of elements."""

    name: str
    sequence: str

    kind = "group_marker"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, "sequence": self.sequence}


@dataclass(frozen=True)
class LocateData(ElementData):
    """Transform declaration of a named level."""

    name: str
    transform: TransformParams

    kind = "locate"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "name": self.name, **self.transform.to_dict()}


@dataclass(frozen=True)
class UnknownData(ElementData):
    tokens: tuple[str, ...] = ()

    kind = "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "tokens": list(self.tokens)}


@dataclass(frozen=True)
class NativeElement:
    """Interpreted record with coordinates in the native SXF space."""

    id: int
    type_name: str
    data: ElementData


@dataclass(frozen=True)
class Element:
    """Element placed on a level, coordinates in drawing space."""

    id: int
    type_name: str
    data: ElementData
    level_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type_name,
            "level_id": self.level_id,
            "properties": self.data.to_dict(),
        }


@dataclass(frozen=True)
class Level:
    """Named drawing layer with the transform into the drawing space."""

    id: str
    name: str
    level_number: int
    origin_x: float = 0.0
    origin_y: float = 0.0
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    @classmethod
    def from_transform(cls, level_id: str, name: str, level_number: int, params: TransformParams) -> "Level":
        return cls(
            id=level_id,
            name=name,
            level_number=level_number,
            origin_x=params.x0,
            origin_y=params.y0,
            rotation=params.a,
            scale_x=params.xs,
            scale_y=params.ys,
        )

    @property
    def transform(self) -> TransformParams:
        return TransformParams(
            x0=self.origin_x,
            y0=self.origin_y,
            a=self.rotation,
            xs=self.scale_x,
            ys=self.scale_y,
        )

    @property
    def is_paper_level(self) -> bool:
        return self.name == PAPER_LEVEL_NAME

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "level_number": self.level_number,
            "origin_x": self.origin_x,
            "origin_y": self.origin_y,
            "rotation": self.rotation,
            "scale_x": self.scale_x,
            "scale_y": self.scale_y,
        }


@dataclass
class CoordinateRange:
    """Running bounding box, empty until the first point is included."""

    min_x: float = math.inf
    max_x: float = -math.inf
    min_y: float = math.inf
    max_y: float = -math.inf

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    def include(self, point: Point2D) -> None:
        if not point.is_finite():
            return
        self.min_x = min(self.min_x, point.x)
        self.max_x = max(self.max_x, point.x)
        self.min_y = min(self.min_y, point.y)
        self.max_y = max(self.max_y, point.y)

    def include_all(self, points: Iterable[Point2D]) -> None:
        for point in points:
            self.include(point)

    def to_dict(self) -> dict[str, float | None]:
        if self.is_empty:
            return {"min_x": None, "max_x": None, "min_y": None, "max_y": None}
        return {"min_x": self.min_x, "max_x": self.max_x, "min_y": self.min_y, "max_y": self.max_y}


@dataclass
class Statistics:
    total_elements: int = 0
    element_type_counts: dict[str, int] = field(default_factory=dict)
    coordinate_range: CoordinateRange = field(default_factory=CoordinateRange)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_elements": self.total_elements,
            "element_type_counts": dict(self.element_type_counts),
            "coordinate_range": self.coordinate_range.to_dict(),
        }


@dataclass
class SFCHeader:
    description: str = ""
    file_name: str = ""
    schema: str = ""
    created_date: str = ""
    author: str = ""
    organization: str = ""
    preprocessor: str = ""
    originating_system: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "description": self.description,
            "file_name": self.file_name,
            "schema": self.schema,
            "created_date": self.created_date,
            "author": self.author,
            "organization": self.organization,
            "preprocessor": self.preprocessor,
            "originating_system": self.originating_system,
        }


@dataclass
class ParsedDocument:
    """Result of parsing one SFC buffer."""

    header: SFCHeader = field(default_factory=SFCHeader)
    elements: list[Element] = field(default_factory=list)
    levels: list[Level] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)
    paper_size: DrawingSheetData | None = None
    colours: dict[int, ColourData] = field(default_factory=dict)
    fonts: dict[int, FontData] = field(default_factory=dict)
    line_widths: dict[int, WidthData] = field(default_factory=dict)

    def level_by_id(self, level_id: str) -> Level | None:
        for level in self.levels:
            if level.id == level_id:
                return level
        return None

    def elements_of(self, level: Level) -> list[Element]:
        return [element for element in self.elements if element.level_id == level.id]

    @property
    def paper_level(self) -> Level | None:
        for level in self.levels:
            if level.is_paper_level:
                return level
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "paper_size": None if self.paper_size is None else self.paper_size.to_dict(),
            "levels": [level.to_dict() for level in self.levels],
            "elements": [element.to_dict() for element in self.elements],
            "colours": {str(code): colour.to_dict() for code, colour in self.colours.items()},
            "fonts": {str(code): font.font_name for code, font in self.fonts.items()},
            "line_widths": {str(code): width.width for code, width in self.line_widths.items()},
            "statistics": self.statistics.to_dict(),
        }
