"""テスト共通フィクスチャ."""

from typing import Iterable, List, Optional, Tuple

import pytest

from perfsuite.benchmark.models import LaunchOutcome, LaunchSpec
from perfsuite.logging import LoggerManager


class FakeClock:
    """あらかじめ与えた経過時間 (ミリ秒) を順に返すクロック.

    `now()` は2回で1組 (起動前・起動後) として扱う.
    """

    def __init__(self, durations_ms: Iterable[int]) -> None:
        self._durations = list(durations_ms)
        self._current_ns = 1_000_000_000
        self._calls = 0

    def now(self) -> int:
        if self._calls % 2 == 1:
            self._current_ns += self._durations.pop(0) * 1_000_000
        self._calls += 1
        return self._current_ns


class FakeLauncher:
    """起動要求を記録し, 指定した結果を返すランチャー."""

    def __init__(self, outcomes: Optional[List[LaunchOutcome]] = None) -> None:
        self.calls: List[Tuple[LaunchSpec, Optional[float]]] = []
        self._outcomes = list(outcomes or [])

    def __call__(self, launch: LaunchSpec, timeout: Optional[float]) -> LaunchOutcome:
        self.calls.append((launch, timeout))
        if self._outcomes:
            return self._outcomes.pop(0)
        return LaunchOutcome(returncode=0)


@pytest.fixture
def fake_clock_factory():
    """FakeClock を作成するファクトリフィクスチャ.

    Example:
        >>> def test_example(fake_clock_factory):
        ...     clock = fake_clock_factory([10, 20, 30])
    """
    return FakeClock


@pytest.fixture
def fake_launcher():
    """常に正常終了を返す FakeLauncher."""
    return FakeLauncher()


@pytest.fixture(autouse=True)
def reset_logger_manager():
    """LoggerManager のシングルトンをテストごとにリセットする."""
    LoggerManager.reset()
    yield
    LoggerManager.reset()


@pytest.fixture
def fake_launcher_factory():
    """結果を指定して FakeLauncher を作成するファクトリフィクスチャ."""
    return FakeLauncher
