"""Sliding-window recurrence generator.

A single :class:`RecurrenceGenerator` drives both ownership modes.  The window
it steps over is supplied by a view object: :class:`BorrowedWindow` advances
the arrays of a :class:`~recursiver.state.RecurrenceState` in place and hands
the state back once the generator is exhausted, closed or collected, while
:class:`OwnedWindow` holds arrays moved out of a consumed state.

Each step computes ``sum(terms[i] * weights[C - 1 - i])``, emits the oldest
term, shifts the window left by one and appends the new value.  The first
``C`` values emitted are therefore the seeds in their original order.
"""

from __future__ import annotations

import logging
import time
import weakref
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

import numpy as np
from prometheus_client import Counter, Summary

from ._types import Ownership, Window
from .utils.config import DEFAULT_GEN_LEN, GeneratorConfig

if TYPE_CHECKING:  # pragma: no cover
    from .state import RecurrenceState

logger = logging.getLogger(__name__)

terms_generated = Counter(
    "recursiver_terms_generated", "number of values emitted by recurrence generators"
)
generators_exhausted = Counter(
    "recursiver_generators_exhausted",
    "number of generators that ran out of steps",
    ["ownership"],
)
step_latency_us = Summary(
    "recursiver_step_latency_us", "recurrence step latency in microseconds"
)

ArrayLike = Union[np.ndarray, Sequence]


def coerce_window(
    terms: ArrayLike, weights: ArrayLike, dtype=None
) -> Tuple[np.ndarray, np.ndarray]:
    """Copy ``terms`` and ``weights`` into matching 1-D arrays.

    Without an explicit ``dtype`` both arrays are promoted to their common
    numpy type so a float weight never gets truncated into an integer window.
    Windows built from plain Python integers are stored as ``object`` arrays
    so they never wrap at 64 bits.

    Raises:
        ValueError: If either input is not 1-D, the lengths differ or the
            window is empty.
    """

    t = np.array(terms, dtype=dtype)
    w = np.array(weights, dtype=dtype)
    if t.ndim != 1 or w.ndim != 1:
        raise ValueError("terms and weights must be one-dimensional")
    if t.shape != w.shape:
        raise ValueError(
            f"terms and weights must have the same length, got {t.size} and {w.size}"
        )
    if t.size == 0:
        raise ValueError("window size must be greater than 0")
    if dtype is None:
        common = np.result_type(t, w)
        if common.kind in "iu" and not (
            isinstance(terms, np.ndarray) or isinstance(weights, np.ndarray)
        ):
            # plain Python ints keep arbitrary precision
            common = np.dtype(object)
        t = t.astype(common, copy=False)
        w = w.astype(common, copy=False)
    return t, w


def resolve_gen_len(
    gen_len: Optional[int] = None, config: Optional[GeneratorConfig] = None
) -> int:
    """Return the step bound from ``gen_len``, ``config`` or the default."""
    if gen_len is None:
        gen_len = config.gen_len if config is not None else DEFAULT_GEN_LEN
    if gen_len < 0:
        raise ValueError(f"gen_len must be non-negative, got {gen_len}")
    return gen_len


class BorrowedWindow:
    """Exclusive in-place view of a state's buffers."""

    ownership = Ownership.BORROWED

    def __init__(self, state: "RecurrenceState") -> None:
        self._state = state
        self._terms = state.terms
        self._weights = state.weights
        self._released = False

    @property
    def terms(self) -> np.ndarray:
        return self._terms

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._state._end_borrow()


class OwnedWindow:
    """Buffers moved out of a consumed state, or built from raw arrays."""

    ownership = Ownership.OWNED

    def __init__(self, terms: np.ndarray, weights: np.ndarray) -> None:
        self._terms: Optional[np.ndarray] = terms
        self._weights: Optional[np.ndarray] = weights

    @property
    def terms(self) -> np.ndarray:
        return self._terms

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    def release(self) -> None:
        self._terms = None
        self._weights = None


class RecurrenceGenerator:
    """Finite lazy producer of recurrence values.

    .. note:: Not thread-safe; a generator and the state it borrows from must
       be used from a single thread.

    The generator yields at most ``gen_len`` values and then stays exhausted.
    Closing it, or letting it be garbage collected, releases its window.
    """

    def __init__(
        self,
        window: Window,
        gen_len: Optional[int] = None,
        config: Optional[GeneratorConfig] = None,
    ) -> None:
        try:
            gen_len = resolve_gen_len(gen_len, config)
        except ValueError:
            window.release()
            raise
        self._window: Optional[Window] = window
        self._ownership = window.ownership
        self._remaining = gen_len
        self._release = weakref.finalize(self, window.release)
        logger.debug(
            "created %s generator: size=%d gen_len=%d",
            self._ownership.value,
            window.terms.size,
            gen_len,
        )

    @classmethod
    def from_arrays(
        cls,
        terms: ArrayLike,
        weights: ArrayLike,
        gen_len: Optional[int] = None,
        *,
        dtype=None,
        config: Optional[GeneratorConfig] = None,
    ) -> "RecurrenceGenerator":
        """Build an owning generator straight from seed and weight arrays."""
        if dtype is None and config is not None:
            dtype = config.dtype
        t, w = coerce_window(terms, weights, dtype=dtype)
        return cls(OwnedWindow(t, w), gen_len=gen_len, config=config)

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------
    def __iter__(self) -> "RecurrenceGenerator":
        return self

    def __next__(self):
        window = self._window
        if window is None:
            raise StopIteration
        if self._remaining <= 0:
            self._exhaust()
            raise StopIteration

        start = time.perf_counter()
        terms = window.terms
        weights = window.weights
        with np.errstate(all="ignore"):
            next_term = np.dot(terms, weights[::-1])
            value = terms[0]
            terms[:-1] = terms[1:]
            terms[-1] = next_term
        self._remaining -= 1

        terms_generated.inc()
        step_latency_us.observe((time.perf_counter() - start) * 1e6)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("emit=%s next=%s remaining=%d", value, next_term, self._remaining)
        if self._remaining == 0:
            self._exhaust()
        return value

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _exhaust(self) -> None:
        generators_exhausted.labels(ownership=self._ownership.value).inc()
        logger.debug("%s generator exhausted", self._ownership.value)
        self._detach()

    def _detach(self) -> None:
        self._window = None
        self._remaining = 0
        self._release()

    def close(self) -> None:
        """Release the window; later draws yield nothing."""
        if self._window is not None:
            logger.debug("%s generator closed", self._ownership.value)
            self._detach()

    def __enter__(self) -> "RecurrenceGenerator":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def remaining(self) -> int:
        """Number of values left before exhaustion."""
        return self._remaining

    @property
    def exhausted(self) -> bool:
        return self._window is None or self._remaining <= 0
