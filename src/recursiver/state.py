"""Recurrence state: the seed window and its weights."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from ._types import ConsumedStateError, StateBorrowedError
from .generator import (
    ArrayLike,
    BorrowedWindow,
    OwnedWindow,
    RecurrenceGenerator,
    coerce_window,
    resolve_gen_len,
)
from .utils.config import GeneratorConfig

logger = logging.getLogger(__name__)


class RecurrenceState:
    """Fixed-size window of terms plus the weights applied to it.

    ``terms`` is ordered oldest to newest.  ``weights`` is ordered by recency
    the other way round: ``weights[0]`` multiplies the newest term.  Neither
    array is reordered on construction.
    """

    def __init__(self, terms: ArrayLike, weights: ArrayLike, dtype=None) -> None:
        self._terms: Optional[np.ndarray]
        self._weights: Optional[np.ndarray]
        self._terms, self._weights = coerce_window(terms, weights, dtype=dtype)
        self._consumed = False
        self._borrowed = False
        logger.debug(
            "state created: size=%d dtype=%s", self._terms.size, self._terms.dtype
        )

    @classmethod
    def default(cls, size: int, dtype=np.float64) -> "RecurrenceState":
        """Return a state whose terms and weights are all one.

        Raises:
            ValueError: If ``size`` is not greater than 0.
        """

        if size <= 0:
            raise ValueError(f"window size must be greater than 0, got {size}")
        return cls(np.ones(size, dtype=dtype), np.ones(size, dtype=dtype))

    new = default

    @classmethod
    def new_with_config(
        cls, terms: ArrayLike, weights: ArrayLike, dtype=None
    ) -> "RecurrenceState":
        """Return a state from caller supplied ``terms`` and ``weights``.

        ``terms`` must already be in ascending time order and ``weights`` in
        descending recency order.
        """

        return cls(terms, weights, dtype=dtype)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def _check_live(self) -> None:
        if self._consumed:
            raise ConsumedStateError("state was moved into a consuming generator")

    def _check_free(self) -> None:
        self._check_live()
        if self._borrowed:
            raise StateBorrowedError("state is already borrowed by a live generator")

    @property
    def terms(self) -> np.ndarray:
        self._check_live()
        return self._terms

    @property
    def weights(self) -> np.ndarray:
        self._check_live()
        return self._weights

    @property
    def size(self) -> int:
        self._check_live()
        return int(self._terms.size)

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def borrowed(self) -> bool:
        return self._borrowed

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return stable copies of ``(terms, weights)``."""
        self._check_live()
        return self._terms.copy(), self._weights.copy()

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def iter(
        self,
        gen_len: Optional[int] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> RecurrenceGenerator:
        """Return a generator that advances this state's window in place.

        The state stays usable; once the generator is exhausted, closed or
        collected it holds the advanced window.
        """

        self._check_free()
        self._borrowed = True
        return RecurrenceGenerator(BorrowedWindow(self), gen_len=gen_len, config=config)

    def __iter__(self) -> RecurrenceGenerator:
        return self.iter()

    def into_iter(
        self,
        gen_len: Optional[int] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> RecurrenceGenerator:
        """Move the buffers into a generator; the state is unusable afterwards."""

        self._check_free()
        gen_len = resolve_gen_len(gen_len, config)
        window = OwnedWindow(self._terms, self._weights)
        self._terms = None
        self._weights = None
        self._consumed = True
        return RecurrenceGenerator(window, gen_len=gen_len, config=config)

    def _end_borrow(self) -> None:
        self._borrowed = False

    def __repr__(self) -> str:
        if self._consumed:
            return "RecurrenceState(<consumed>)"
        return f"RecurrenceState(terms={self._terms!r}, weights={self._weights!r})"
