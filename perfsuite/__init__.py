"""
perfsuite: 外部コマンドの実行時間を繰り返し計測するベンチマークツール.

Example:
    >>> from perfsuite import BenchmarkRunner, RunConfiguration
    >>> config = RunConfiguration(10, ("python",), (".",), ("-c pass",))
    >>> result = BenchmarkRunner().run(config)
    >>> result.statistics[0].median
"""

from .benchmark import BenchmarkRunner, RunConfiguration, RunOptions
from .logging import LoggerManager

__version__ = "0.1.0"

__all__ = ["BenchmarkRunner", "RunConfiguration", "RunOptions", "LoggerManager"]
