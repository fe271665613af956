"""Public type definitions shared by the recurrence modules."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, TypeVar

import numpy as np


class Scalar(Protocol):
    """Protocol for window elements.

    Elements must support ``+`` and ``*``; the ratio transform additionally
    needs ``/``.  ``type(x)()`` must produce the additive identity.
    """

    def __add__(self, other): ...

    def __mul__(self, other): ...


T = TypeVar("T", bound=Scalar)


class Ownership(str, Enum):
    """How a generator holds its window buffers."""

    BORROWED = "borrowed"
    OWNED = "owned"


class Window(Protocol):
    """Mutable access to a ``(terms, weights)`` pair.

    ``terms`` is advanced in place by the generator; ``weights`` is only read.
    """

    ownership: Ownership

    @property
    def terms(self) -> np.ndarray:
        """Live window terms, oldest first."""

    @property
    def weights(self) -> np.ndarray:
        """Weights, newest-term weight first."""

    def release(self) -> None:
        """Give up access to the buffers."""


class RecursiverError(Exception):
    """Base class for recurrence errors."""


class ConsumedStateError(RecursiverError, RuntimeError):
    """Raised when a state is used after ``into_iter`` moved its buffers."""


class StateBorrowedError(RecursiverError, RuntimeError):
    """Raised when a second exclusive view of a state is requested."""
