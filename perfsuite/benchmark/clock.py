"""計測用クロックの Protocol 定義と既定実装.

ランナーへ注入することで, テストでは固定値を返す Fake に差し替えられる.
"""

import time
from typing import Protocol


class IClock(Protocol):
    """単調増加する時刻源のインターフェース."""

    def now(self) -> int:
        """現在時刻を返す.

        Returns:
            単調増加するナノ秒単位のタイムスタンプ.
        """
        ...


class MonotonicClock:
    """`time.perf_counter_ns` を使う既定クロック.

    壁時計の補正の影響を受けない.
    """

    def now(self) -> int:
        """現在時刻をナノ秒で返す."""
        return time.perf_counter_ns()
