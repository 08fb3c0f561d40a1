"""
perfsuite.benchmark: コマンド実行時間の計測モジュール.

子プロセスの起動, 経過時間の計測, 外れ値除去後の統計計算を提供します。
"""

from .clock import IClock, MonotonicClock
from .models import (
    BenchmarkResult,
    CommandTimingSeries,
    DurationSample,
    RunConfiguration,
    RunOptions,
    TrimmedStatistics,
    UsageError,
)
from .runner import BenchmarkRunner

__all__ = [
    "BenchmarkResult",
    "BenchmarkRunner",
    "CommandTimingSeries",
    "DurationSample",
    "IClock",
    "MonotonicClock",
    "RunConfiguration",
    "RunOptions",
    "TrimmedStatistics",
    "UsageError",
]
