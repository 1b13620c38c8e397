"""SFC file reader handling the file encoding.

SFC files written by Japanese CAD software are usually Shift-JIS (cp932)
encoded. The reader tries the configured codecs in order and hands the
decoded text to the parser.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from ..config import DEFAULT_ENCODINGS

log = logging.getLogger(__name__)


class SFCReader:
    """Reads an SFC file and decodes it with the first matching codec."""

    def __init__(self, sfc_path: Path, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> None:
        """Initialize SFC reader with file path.

        Parameters
        ----------
        sfc_path : Path
            Path to the SFC file to read
        encodings : Sequence[str]
            Codecs tried in order
        """
        self.sfc_path = sfc_path
        self.encodings = list(encodings)
        self.encoding: str | None = None

    def decode(self, content: bytes) -> str:
        """Decode raw SFC bytes with the first codec that succeeds.

        Raises
        ------
        UnicodeDecodeError
            If none of the codecs can decode the content
        """
        last_error: UnicodeDecodeError | None = None
        for encoding in self.encodings:
            try:
                text = content.decode(encoding)
            except UnicodeDecodeError as e:
                log.debug(f"Decoding {self.sfc_path} as {encoding} failed: {e}")
                last_error = e
                continue
            self.encoding = encoding
            log.info(f"Decoded {self.sfc_path} as {encoding}")
            return text
        if last_error is None:
            raise ValueError("No encodings configured")
        raise UnicodeDecodeError(
            last_error.encoding,
            last_error.object,
            last_error.start,
            last_error.end,
            f"cannot decode {self.sfc_path} with {self.encodings}",
        )

    def read_text(self) -> str:
        """Read and decode the SFC file.

        Raises
        ------
        FileNotFoundError
            If SFC file does not exist
        UnicodeDecodeError
            If the file cannot be decoded with any configured codec
        """
        if not self.sfc_path.exists():
            raise FileNotFoundError(f"SFC file not found: {self.sfc_path}")
        return self.decode(self.sfc_path.read_bytes())
