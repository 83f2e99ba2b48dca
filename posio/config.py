"""
Stream configuration.

A ``StreamConfig`` collects the knobs that control how files are opened and
how strictly record ordering is enforced. It can be built directly, from one
of the named presets, or from a JSON file:

    {
        "time_order": "warn",
        "pos_header_lines": 1,
        "point_format": null,
        "accuracy_format": "poq"
    }
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from posio.ordering import TimeOrder


# ============================================================================
# PRESET CONFIGURATIONS
# ============================================================================

PRESETS: Dict[str, Dict[str, Any]] = {
    "strict": {
        "description": "Reject any record that is not strictly later than the last",
        "time_order": "raise",
    },
    "lenient": {
        "description": "Warn about out-of-order records and keep going",
        "time_order": "warn",
    },
    "raw": {
        "description": "No ordering checks, records are used as read",
        "time_order": "ignore",
    },
}


@dataclass(frozen=True)
class StreamConfig:
    """
    Options for opening and merging record streams.

    Attributes:
        time_order: Policy for non-increasing times: 'raise', 'warn' or
                    'ignore'. Default: 'raise'.
        pos_header_lines: Header lines to skip in ASCII pos files.
        point_format: Force the point file format ('pos', 'sbet', 'pof').
                      None selects by file suffix.
        accuracy_format: Force the accuracy file format ('poq').
                         None selects by file suffix.
    """

    time_order: str = "raise"
    pos_header_lines: int = 1
    point_format: Optional[str] = None
    accuracy_format: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate option values."""
        TimeOrder.coerce(self.time_order)
        if not isinstance(self.pos_header_lines, int) or isinstance(
            self.pos_header_lines, bool
        ):
            raise TypeError(
                f"pos_header_lines must be an int, got {type(self.pos_header_lines)}"
            )
        if self.pos_header_lines < 0:
            raise ValueError(
                f"pos_header_lines must be >= 0, got {self.pos_header_lines}"
            )

    @property
    def time_order_policy(self) -> TimeOrder:
        return TimeOrder.coerce(self.time_order)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "StreamConfig":
        """Build a config from a dict, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known - {"description"})
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")
        return cls(**{k: v for k, v in values.items() if k in known})

    @classmethod
    def from_preset(cls, name: str) -> "StreamConfig":
        """Build a config from one of ``PRESETS``."""
        if name not in PRESETS:
            raise ValueError(
                f"Unknown preset: {name}. Choose from {sorted(PRESETS)}"
            )
        return cls.from_dict(PRESETS[name])

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "StreamConfig":
        """Load a config from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            values = json.load(f)
        if not isinstance(values, dict):
            raise ValueError(f"Configuration in {path} must be a JSON object")
        return cls.from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
