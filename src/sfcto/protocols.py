"""Protocol definitions for the collaborators of the SFC parser.

This module defines the interfaces that allow readers, exporters and
progress reporting to be exchanged without touching the parser.
"""

from typing import Protocol

from .models import ParsedDocument


class ITextSource(Protocol):
    """Protocol for sources providing the decoded SFC text."""

    def read_text(self) -> str:
        """Read and decode the SFC content.

        Returns
        -------
        str
            Decoded SFC text
        """
        ...


class IExporter(Protocol):
    """Protocol for exporting a parsed document."""

    def export_data(self, document: ParsedDocument) -> None:
        """Export the parsed document.

        Parameters
        ----------
        document : ParsedDocument
            Document with placed elements, levels and statistics
        """
        ...


class IProgressCallback(Protocol):
    def __call__(self, processed: int, total: int) -> None:
        """Report the number of processed records of the total."""
        ...
