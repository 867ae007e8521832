"""Constants and logging setup shared by every layer."""

from .constants import (
    EPS_CLOSE,
    DEFAULT_DIGITS,
    DEFAULT_SEED,
    PSEUDOINVERSE_CUTOFF,
    SENTINEL_PAD,
)
from .logging_config import setup_logging
