"""Record tokenizer for the SFC (ISO-10303-21 based) text format.

The tokenizer reads the HEADER section into an ``SFCHeader`` and yields the
records of the DATA section in file order. SFC files wrap each record in
``/*SXF`` ... ``SXF*/`` comment lines; these and every other line that is
not a ``#id = TYPE(...)`` record are skipped silently.
"""

import logging
import re
from collections.abc import Iterable, Iterator

from ..models import Record, SFCHeader
from .parameters import split_parameters, unquote

log = logging.getLogger(__name__)

RECORD_PATTERN = re.compile(r"^#(\d+)\s*=\s*(\w+)\s*\((.*)\)\s*;?\s*$")
HEADER_PATTERN = re.compile(r"^(\w+)\s*\((.*)\)\s*;\s*$", re.DOTALL)

HEADER_SECTION = "HEADER;"
DATA_SECTION = "DATA;"
END_SECTION = "ENDSEC;"


def parse_record(line: str, line_index: int = -1) -> Record | None:
    """Parse one line into a record.

    Returns
    -------
    Record | None
        The record or None if the line is not a ``#id = TYPE(...)`` record
    """
    match = RECORD_PATTERN.match(line.strip())
    if match is None:
        return None
    record_id, type_name, param_string = match.groups()
    return Record(
        id=int(record_id),
        type_name=type_name,
        tokens=tuple(split_parameters(param_string)),
        line_index=line_index,
    )


def iter_data_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_index, line)`` of every candidate record in the DATA section."""
    in_data = False
    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if line == DATA_SECTION:
            in_data = True
            continue
        if line == END_SECTION:
            in_data = False
            continue
        if not in_data:
            continue
        if RECORD_PATTERN.match(line) is None:
            continue
        yield index, line


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """Yield the records of the DATA section in file order."""
    for index, line in iter_data_lines(lines):
        record = parse_record(line, index)
        if record is not None:
            yield record


def tokenize(text: str) -> list[Record]:
    """Tokenize a whole decoded SFC buffer into its data records."""
    return list(iter_records(text.splitlines()))


def _iter_header_statements(lines: Iterable[str]) -> Iterator[str]:
    in_header = False
    statement = ""
    for raw_line in lines:
        line = raw_line.strip()
        if line == HEADER_SECTION:
            in_header = True
            continue
        if line == DATA_SECTION:
            return
        if line == END_SECTION:
            if in_header:
                return
            continue
        if not in_header or not line:
            continue
        statement = f"{statement} {line}" if statement else line
        if statement.endswith(";"):
            yield statement
            statement = ""


def _first_item(token: str) -> str:
    """Return the first entry of a token that may be a ``('a','b')`` list."""
    token = token.strip()
    if token.startswith("(") and token.endswith(")"):
        items = split_parameters(token[1:-1])
        return unquote(items[0]) if items else ""
    return unquote(token)


def parse_header(lines: Iterable[str]) -> SFCHeader:
    """Read FILE_DESCRIPTION, FILE_NAME and FILE_SCHEMA of the HEADER section."""
    header = SFCHeader()
    for statement in _iter_header_statements(lines):
        match = HEADER_PATTERN.match(statement)
        if match is None:
            log.debug(f"Skipping header statement: {statement}")
            continue
        keyword, param_string = match.groups()
        params = split_parameters(param_string)
        if keyword == "FILE_DESCRIPTION" and params:
            header.description = _first_item(params[0])
        elif keyword == "FILE_NAME":
            values = [_first_item(param) for param in params]
            values += [""] * (7 - len(values))
            header.file_name = values[0]
            header.created_date = values[1]
            header.author = values[2]
            header.organization = values[3]
            header.preprocessor = values[4]
            header.originating_system = values[5]
        elif keyword == "FILE_SCHEMA" and params:
            header.schema = _first_item(params[0])
    return header
