"""JSON export of parsed SFC documents.

The exported JSON contains the header, the levels with their transform,
the placed elements in drawing coordinates and the statistics. It is the
format read by the drawing and layer views of the surrounding application.
"""

import json
from pathlib import Path
from typing import Any

from ..models import Level, ParsedDocument


class JsonExporter:
    """Exports a parsed document to a JSON file."""

    def __init__(self, output_path: Path) -> None:
        """Initialize JSON exporter with output file path.

        Parameters
        ----------
        output_path : Path
            Path where the JSON file will be saved
        """
        self.output_path = output_path
        self.exported_levels: dict[str, int] = {}

    def export_data(self, document: ParsedDocument) -> None:
        export_data = document.to_dict()
        export_data["levels"] = [self._export_level(document, level) for level in document.levels]
        try:
            with open(self.output_path, "w", encoding="utf-8") as json_file:
                json.dump(export_data, json_file, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OSError(f"Cannot write JSON file {self.output_path}: {e}") from e

    def _export_level(self, document: ParsedDocument, level: Level) -> dict[str, Any]:
        level_data = level.to_dict()
        element_count = len(document.elements_of(level))
        level_data["element_count"] = element_count
        self.exported_levels[level.id] = element_count
        return level_data
