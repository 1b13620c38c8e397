"""Coordinate transformation from native SXF coordinates to drawing space.

Each level declares an affine transform (origin, rotation in degrees and
independent X/Y scale) via ``sfig_locate_feature``. The transform maps a
native point (X, Y) to the drawing point (x, y):

    theta = a * pi / 180
    x = x0 + xs * X * cos(theta) - ys * Y * sin(theta)
    y = y0 + xs * X * sin(theta) + ys * Y * cos(theta)
"""

import logging
import math
from collections.abc import Iterable

import numpy as np

from ..models import (
    IDENTITY_TRANSFORM,
    Element,
    ElementData,
    Level,
    NativeElement,
    Point2D,
    PolylineData,
    TransformParams,
)

log = logging.getLogger(__name__)

MAX_ROTATION_DEGREES = 360.0


def validate_transform(params: TransformParams) -> bool:
    """Check if a transform can be applied without producing garbage.

    Parameters
    ----------
    params : TransformParams
        Transform to check

    Returns
    -------
    bool
        True if all values are finite, both scales are non-zero and the
        rotation is within [-360, 360] degrees
    """
    values = (params.x0, params.y0, params.a, params.xs, params.ys)
    if not all(math.isfinite(value) for value in values):
        return False
    if params.xs == 0 or params.ys == 0:
        return False
    return abs(params.a) <= MAX_ROTATION_DEGREES


def valid_or_identity(params: TransformParams, name: str = "") -> TransformParams:
    """Return the transform if valid, the identity transform otherwise."""
    if validate_transform(params):
        return params
    log.warning(f"Invalid transform for level '{name}' ({format_transform(params)}), using identity")
    return IDENTITY_TRANSFORM


def format_transform(params: TransformParams) -> str:
    """Render transform values for log and CLI output."""
    return (
        f"origin({params.x0:.3f}, {params.y0:.3f}) rotation {params.a:.1f}° "
        f"scale({params.xs:.3f}, {params.ys:.3f})"
    )


def transform_point(point: Point2D, params: TransformParams) -> Point2D:
    """Transform one native point into drawing coordinates."""
    theta = params.a * math.pi / 180
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    scaled_x = params.xs * point.x
    scaled_y = params.ys * point.y
    x = params.x0 + scaled_x * cos_theta - scaled_y * sin_theta
    y = params.y0 + scaled_x * sin_theta + scaled_y * cos_theta
    return Point2D(x=x, y=y)


def inverse_transform_point(point: Point2D, params: TransformParams) -> Point2D:
    """Transform a drawing point back into native coordinates.

    Raises
    ------
    ValueError
        If the transform is not invertible (see ``validate_transform``)
    """
    if not validate_transform(params):
        raise ValueError(f"Transform is not invertible: {format_transform(params)}")
    theta = params.a * math.pi / 180
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    dx = point.x - params.x0
    dy = point.y - params.y0
    x = (dx * cos_theta + dy * sin_theta) / params.xs
    y = (-dx * sin_theta + dy * cos_theta) / params.ys
    return Point2D(x=x, y=y)


def transform_angle(angle: float, params: TransformParams) -> float:
    """Map a native direction angle (degrees) into drawing space, in [0, 360)."""
    theta = math.radians(angle)
    dx = params.xs * math.cos(theta)
    dy = params.ys * math.sin(theta)
    return (math.degrees(math.atan2(dy, dx)) + params.a) % 360


def transform_points(points: Iterable[Point2D], params: TransformParams) -> list[Point2D]:
    """Transform many points at once with numpy."""
    coords = np.array([(point.x, point.y) for point in points], dtype=float)
    if coords.size == 0:
        return []
    theta = np.deg2rad(params.a)
    rotation = np.array(
        [
            [np.cos(theta), -np.sin(theta)],
            [np.sin(theta), np.cos(theta)],
        ]
    )
    scaled = coords * np.array([params.xs, params.ys])
    result = scaled @ rotation.T + np.array([params.x0, params.y0])
    return [Point2D(x=float(x), y=float(y)) for x, y in result]


def transform_data(data: ElementData, params: TransformParams) -> ElementData:
    """Transform every coordinate of the element data exactly once."""
    if isinstance(data, PolylineData):
        return PolylineData(
            layer=data.layer,
            color=data.color,
            line_type=data.line_type,
            pen=data.pen,
            vertices=tuple(transform_points(data.vertices, params)),
        )

    def mapper(point: Point2D) -> Point2D:
        return transform_point(point, params)

    return data.transformed(mapper)


def place_element(element: NativeElement, level: Level) -> Element:
    """Create the placed element of a native element on the given level."""
    return Element(
        id=element.id,
        type_name=element.type_name,
        data=transform_data(element.data, level.transform),
        level_id=level.id,
    )
