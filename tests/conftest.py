import time
import types

import pytest


class _TimingBenchmark:
    """Stand-in for the pytest-benchmark fixture recording only the mean."""

    def __init__(self) -> None:
        self.stats = types.SimpleNamespace(stats=types.SimpleNamespace(mean=0.0))

    def pedantic(self, func, iterations: int = 1, rounds: int = 1) -> None:
        calls = iterations * rounds
        start = time.perf_counter()
        for _ in range(calls):
            func()
        self.stats.stats.mean = (time.perf_counter() - start) / calls


try:  # pragma: no cover - the real plugin provides its own fixture
    import pytest_benchmark.plugin  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover - plugin not installed
    @pytest.fixture
    def benchmark():
        return _TimingBenchmark()


@pytest.fixture
def fib_seeds():
    return [0.0, 1.0], [1.0, 1.0]
