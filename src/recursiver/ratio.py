"""Successive-term ratios of a recurrence sequence."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator, Optional

import numpy as np

from ._types import T
from .generator import ArrayLike, RecurrenceGenerator
from .utils.config import GeneratorConfig

_EMPTY = object()


def ratios(terms: Iterable[T]) -> Iterator[T]:
    """Yield ``term[n] / term[n - 1]`` for every term.

    The first output has no predecessor and is the additive identity of the
    first term's type.  Division by zero behaves as the scalar type defines
    it: numpy scalars give ``inf``/``nan`` silently, Python numbers raise.
    """

    prev = _EMPTY
    for term in terms:
        if prev is _EMPTY:
            out = type(term)()
        else:
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                out = term / prev
        prev = term
        yield out


def compute_rate_with_data(
    count: int,
    terms: ArrayLike,
    weights: ArrayLike,
    gen_len: Optional[int] = None,
    *,
    dtype=None,
    config: Optional[GeneratorConfig] = None,
) -> Iterator:
    """Return the ratio sequence of the first ``count`` recurrence values.

    A consuming generator is built from ``terms`` and ``weights``; fewer than
    ``count`` ratios come out when the generator's step bound is smaller.
    """

    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    gen = RecurrenceGenerator.from_arrays(
        terms, weights, gen_len, dtype=dtype, config=config
    )
    return ratios(islice(gen, count))
