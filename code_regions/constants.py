"""Constants used across the code-regions package."""

from __future__ import annotations

from .config import RegionConfig

DEFAULT_CONFIG = RegionConfig()

# Limits
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
DEFAULT_MAX_LINE_LENGTH = DEFAULT_CONFIG.max_line_length

# Folding
FOLDEXPR_UNCHANGED = "="
UNNAMED_REGION = "(unnamed)"
