"""SFC parser orchestrating tokenizing, interpretation and level resolution.

This module provides the SFCParser class that turns one decoded SFC text
buffer into a ParsedDocument:
1. Header and record tokenizing (tokenizer)
2. Record interpretation (interpreter), optionally in batches
3. Level grouping, transform matching and placement (levels)
4. Level renumbering
"""

import logging
from collections.abc import Sequence

from .config import ParserConfig
from .models import (
    ColourData,
    DrawingSheetData,
    FontData,
    ParsedDocument,
    Record,
    WidthData,
)
from .process.interpreter import interpret_record
from .process.levels import InterpretedRecord, resolve_levels
from .process.statistics import StatisticsAggregator
from .process.tokenizer import iter_records, parse_header
from .protocols import IProgressCallback, ITextSource

log = logging.getLogger(__name__)

# First code of the user defined tables, codes below are predefined by SXF
USER_COLOUR_START = 17
USER_WIDTH_START = 10
USER_FONT_START = 1


class SFCParser:
    """Parses decoded SFC text into a ParsedDocument.

    A parser keeps no state between calls; every parse builds a new
    document and a new statistics aggregator.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        """Initialize the parser.

        Parameters
        ----------
        config : ParserConfig | None
            Parser options, defaults are used if None
        """
        self.config = config or ParserConfig()

    def parse(self, text: str, progress: IProgressCallback | None = None) -> ParsedDocument:
        """Parse a whole SFC buffer.

        Parameters
        ----------
        text : str
            Decoded SFC file content
        progress : IProgressCallback | None
            Called after every interpreted batch with processed and total records

        Returns
        -------
        ParsedDocument
            Document with placed elements, renumbered levels and statistics.
            A buffer without DATA section gives an empty document.

        Raises
        ------
        TypeError
            If text is not a string
        """
        if not isinstance(text, str):
            raise TypeError(f"SFC content must be a str, got {type(text).__name__}")

        lines = text.splitlines()
        document = ParsedDocument(header=parse_header(lines))
        aggregator = StatisticsAggregator()
        records = list(iter_records(lines))
        log.info(f"Parsing SFC content: {len(lines)} lines, {len(records)} records")

        interpreted = self._interpret_in_batches(records, document, aggregator, progress)
        levels, elements = resolve_levels(interpreted, aggregator)

        document.levels = levels
        document.elements = elements
        document.statistics = aggregator.statistics
        log.info(f"Parsed {len(elements)} elements on {len(levels)} levels")
        return document

    def parse_source(self, source: ITextSource, progress: IProgressCallback | None = None) -> ParsedDocument:
        """Read the text from ``source`` and parse it."""
        return self.parse(source.read_text(), progress=progress)

    def parse_in_batches(
        self, text: str, batch_size: int, progress: IProgressCallback | None = None
    ) -> ParsedDocument:
        """Parse with the records interpreted in batches of ``batch_size``.

        Batches only split the interpretation work for progress reporting,
        grouping and transform matching always see the whole record stream.
        """
        if batch_size < 1:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        parser = SFCParser(
            ParserConfig(
                encodings=list(self.config.encodings),
                batch_size=batch_size,
                dxf_text_height=self.config.dxf_text_height,
            )
        )
        return parser.parse(text, progress=progress)

    def _interpret_in_batches(
        self,
        records: Sequence[Record],
        document: ParsedDocument,
        aggregator: StatisticsAggregator,
        progress: IProgressCallback | None,
    ) -> list[InterpretedRecord]:
        total = len(records)
        batch_size = self.config.batch_size or max(total, 1)
        interpreted: list[InterpretedRecord] = []
        for start in range(0, total, batch_size):
            for record in records[start : start + batch_size]:
                interpreted.append(self._interpret(record, document, aggregator))
            if progress is not None:
                progress(min(start + batch_size, total), total)
        return interpreted

    def _interpret(
        self, record: Record, document: ParsedDocument, aggregator: StatisticsAggregator
    ) -> InterpretedRecord:
        aggregator.count(record.type_name)
        element = interpret_record(record)
        if element is None:
            return record, None
        data = element.data
        if isinstance(data, DrawingSheetData) and document.paper_size is None:
            log.info(f"Paper size {data.width} x {data.height} ({data.title})")
            document.paper_size = data
        elif isinstance(data, ColourData):
            document.colours[USER_COLOUR_START + len(document.colours)] = data
        elif isinstance(data, WidthData):
            document.line_widths[USER_WIDTH_START + len(document.line_widths)] = data
        elif isinstance(data, FontData):
            document.fonts[USER_FONT_START + len(document.fonts)] = data
        return record, element
