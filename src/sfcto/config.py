import codecs
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ("cp932", "shift_jis", "utf-8")


@dataclass
class ParserConfig:
    """Options of the SFC reader, parser and exporters.

    Parameters
    ----------
    encodings : list[str]
        Codecs tried in order when decoding an SFC file
    batch_size : int
        Number of records interpreted per batch, 0 interprets all at once
    dxf_text_height : float
        Text height used for text elements in the DXF export
    """

    encodings: list[str] = field(default_factory=lambda: list(DEFAULT_ENCODINGS))
    batch_size: int = 0
    dxf_text_height: float = 2.5

    def to_dict(self) -> dict:
        return {
            "Encodings": list(self.encodings),
            "BatchSize": self.batch_size,
            "DxfTextHeight": self.dxf_text_height,
        }


def _is_known_codec(name: str) -> bool:
    try:
        codecs.lookup(name)
        return True
    except LookupError:
        return False


class ConfigurationHandler:
    """Loads the parser configuration from a JSON file."""

    def __init__(self, config_path: Path) -> None:
        """Initialize the handler with the configuration file.

        Parameters
        ----------
        config_path : Path
            Path to JSON configuration file
        """
        self.config_path = config_path
        self.config = ParserConfig()

    def _create_encodings(self, encodings: list[str] | str | None) -> list[str]:
        if encodings is None:
            return list(DEFAULT_ENCODINGS)
        if isinstance(encodings, str):
            encodings = [encodings]
        valid = []
        for encoding in encodings:
            if not _is_known_codec(encoding):
                log.warning(f"Unknown encoding '{encoding}' ignored")
                continue
            valid.append(encoding)
        if not valid:
            log.warning(f"No valid encoding configured, defaulting to {DEFAULT_ENCODINGS}")
            return list(DEFAULT_ENCODINGS)
        return valid

    def _create_batch_size(self, value: int | None) -> int:
        if value is None:
            return 0
        if not isinstance(value, int) or value < 0:
            log.warning(f"Invalid batch size {value}, defaulting to 0")
            return 0
        return value

    def load_config(self) -> ParserConfig:
        """Load the configuration from the JSON file.

        Expected JSON format:
        {
            "Encodings": ["cp932", "utf-8"],
            "BatchSize": 1000,
            "DxfTextHeight": 2.5
        }

        Raises
        ------
        FileNotFoundError
            If configuration file does not exist
        json.JSONDecodeError
            If configuration file is not valid JSON
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(f"Invalid JSON in configuration file: {e}", e.doc, e.pos) from e

        self.config = ParserConfig(
            encodings=self._create_encodings(config_data.get("Encodings")),
            batch_size=self._create_batch_size(config_data.get("BatchSize")),
            dxf_text_height=float(config_data.get("DxfTextHeight", 2.5)),
        )
        return self.config
