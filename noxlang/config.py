"""
Configuration for the nox toolchain.
"""

import os
from dataclasses import dataclass

DEBUG_ENV_VAR = "NOX_DEBUG"


@dataclass
class NoxConfiguration:
    """Configuration shared by the scanner, renderer and CLI"""
    filename: str = "<string>"  # Name used in source locations
    indent_unit: str = "    "  # One rendered indentation level
    debug_mode: bool = False  # Log every token push and raised error

    def __post_init__(self):
        if not self.indent_unit or self.indent_unit.strip():
            raise ValueError("indent_unit must be a non-empty run of whitespace")
        if len(set(self.indent_unit)) != 1:
            raise ValueError("indent_unit must use a single whitespace character")

    @classmethod
    def from_env(cls, **overrides) -> "NoxConfiguration":
        """Build a configuration, turning on debug mode when NOX_DEBUG is set."""
        flag = os.environ.get(DEBUG_ENV_VAR, "").strip().lower()
        overrides.setdefault("debug_mode", flag not in ("", "0", "false", "no"))
        return cls(**overrides)
