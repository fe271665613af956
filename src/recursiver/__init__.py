"""Linear-recurrence sequences over a fixed-size window."""

from ._types import (
    ConsumedStateError,
    Ownership,
    RecursiverError,
    StateBorrowedError,
)
from .generator import BorrowedWindow, OwnedWindow, RecurrenceGenerator
from .ratio import compute_rate_with_data, ratios
from .state import RecurrenceState
from .utils import DEFAULT_GEN_LEN, GeneratorConfig, parse_args

__all__ = [
    "RecurrenceState",
    "RecurrenceGenerator",
    "BorrowedWindow",
    "OwnedWindow",
    "Ownership",
    "ratios",
    "compute_rate_with_data",
    "DEFAULT_GEN_LEN",
    "GeneratorConfig",
    "parse_args",
    "RecursiverError",
    "ConsumedStateError",
    "StateBorrowedError",
]
