"""DXF export of the placed SFC geometry.

Every level becomes a DXF layer, every geometric element is added to the
modelspace in drawing coordinates. Attribute records (colours, fonts,
widths, sheets) are not exported as entities.
"""

import logging
import math
import re
from pathlib import Path

import ezdxf.filemanagement as ezdxf
from ezdxf.colors import rgb2int
from ezdxf.document import Drawing
from ezdxf.layouts import Modelspace

from ..models import (
    IDENTITY_TRANSFORM,
    ArcData,
    Element,
    Level,
    LineData,
    ParsedDocument,
    PointData,
    PolylineData,
    TextData,
    TransformParams,
)
from ..process.transform import transform_angle

log = logging.getLogger(__name__)

INVALID_LAYER_CHARS = re.compile(r'[<>/\\":;?*|=`]')
DXF_VERSION = "R2010"


def to_layer_name(name: str) -> str:
    """Replace characters DXF does not allow in layer names."""
    layer_name = INVALID_LAYER_CHARS.sub("_", name).strip()
    return layer_name or "0"


class DxfExporter:
    """Exports the placed elements of a parsed document to a DXF file."""

    def __init__(self, output_path: Path, text_height: float = 2.5) -> None:
        """Initialize DXF exporter with output file path.

        Parameters
        ----------
        output_path : Path
            Path where the DXF file will be saved
        text_height : float
            Height of text entities without height in the SFC file
        """
        self.output_path = output_path
        self.text_height = text_height
        self.exported: dict[str, int] = {}
        self.not_exported: list[Element] = []

    def create_drawing(self, document: ParsedDocument) -> Drawing:
        """Create the DXF drawing without writing it."""
        doc = ezdxf.new(DXF_VERSION)
        layer_names: dict[str, str] = {}
        for level in document.levels:
            layer_name = to_layer_name(level.name)
            layer_names[level.id] = layer_name
            if not doc.layers.has_entry(layer_name):
                doc.layers.add(layer_name)

        msp = doc.modelspace()
        for element in document.elements:
            dxfattribs = {"layer": layer_names.get(element.level_id, "0")}
            true_color = self._true_color(document, element)
            if true_color is not None:
                dxfattribs["true_color"] = true_color
            level = document.level_by_id(element.level_id)
            if self._add_entity(msp, element, level, dxfattribs):
                self.exported[element.type_name] = self.exported.get(element.type_name, 0) + 1
            elif element.data.has_geometry:
                self.not_exported.append(element)
        return doc

    def export_data(self, document: ParsedDocument) -> None:
        doc = self.create_drawing(document)
        try:
            doc.saveas(self.output_path)
        except OSError as e:
            raise OSError(f"Cannot write DXF file {self.output_path}: {e}") from e
        log.info(f"Exported {sum(self.exported.values())} entities to {self.output_path}")

    def _true_color(self, document: ParsedDocument, element: Element) -> int | None:
        color = getattr(element.data, "color", None)
        if color is None or not color.isdigit():
            return None
        colour = document.colours.get(int(color))
        if colour is None:
            return None
        return rgb2int((colour.r, colour.g, colour.b))

    def _add_entity(self, msp: Modelspace, element: Element, level: Level | None, dxfattribs: dict) -> bool:
        data = element.data
        if isinstance(data, LineData):
            msp.add_line((data.start.x, data.start.y), (data.end.x, data.end.y), dxfattribs=dxfattribs)
        elif isinstance(data, PolylineData):
            if len(data.vertices) < 2:
                log.debug(f"Polyline #{element.id} with less than 2 vertices not exported")
                return False
            points = [(vertex.x, vertex.y) for vertex in data.vertices]
            msp.add_lwpolyline(points, dxfattribs=dxfattribs)
        elif isinstance(data, ArcData):
            return self._add_arc(msp, element.id, data, _level_transform(level), dxfattribs)
        elif isinstance(data, PointData):
            msp.add_point((data.point.x, data.point.y), dxfattribs=dxfattribs)
        elif isinstance(data, TextData):
            params = _level_transform(level)
            text_attribs = dict(dxfattribs)
            text_attribs["insert"] = (data.anchor.x, data.anchor.y)
            text_attribs["height"] = data.height * abs(params.ys) if data.height else self.text_height
            rotation = (data.angle or 0.0) + params.a
            if data.angle is not None or rotation:
                text_attribs["rotation"] = rotation % 360
            msp.add_text(data.text, dxfattribs=text_attribs)
        else:
            return False
        return True

    def _add_arc(
        self, msp: Modelspace, element_id: int, data: ArcData, params: TransformParams, dxfattribs: dict
    ) -> bool:
        """Add an arc or circle with radius and angles in drawing space.

        The center is already placed; radius and angles are native and follow
        the scale and rotation of the level here.
        """
        if data.radius is None or data.radius <= 0:
            log.debug(f"Arc #{element_id} without radius not exported")
            return False
        if not math.isclose(abs(params.xs), abs(params.ys)):
            log.warning(f"Arc #{element_id} on a level with unequal X/Y scale not exported")
            return False
        center = (data.center.x, data.center.y)
        radius = data.radius * abs(params.xs)
        if data.start_angle is None or data.end_angle is None:
            msp.add_circle(center, radius, dxfattribs=dxfattribs)
            return True
        start_angle = transform_angle(data.start_angle, params)
        end_angle = transform_angle(data.end_angle, params)
        if params.xs * params.ys < 0:
            # Mirrored levels reverse the arc direction
            start_angle, end_angle = end_angle, start_angle
        msp.add_arc(center, radius, start_angle, end_angle, dxfattribs=dxfattribs)
        return True


def _level_transform(level: Level | None) -> TransformParams:
    return IDENTITY_TRANSFORM if level is None else level.transform
