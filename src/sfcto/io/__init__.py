"""SFC I/O package.

This package provides:
- SFCReader: File reading and decoding
- JsonExporter: JSON export of parsed documents
- DxfExporter: DXF export of the placed geometry
"""

from .dxf_exporter import DxfExporter
from .json_exporter import JsonExporter
from .sfc_reader import SFCReader

__all__ = [
    "SFCReader",
    "JsonExporter",
    "DxfExporter",
]
