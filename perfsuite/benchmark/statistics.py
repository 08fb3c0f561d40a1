"""計測値の外れ値除去と平均値・中央値の計算."""

from __future__ import annotations

from typing import List, Sequence

from perfsuite.benchmark.models import (
    CommandTimingSeries,
    StatValue,
    TrimmedStatistics,
)


def compute_trim_count(iteration_count: int) -> int:
    """両端から除去する件数を返す.

    反復回数の 10% を両端に半分ずつ割り当て, 最低でも1件は除去する.

    Args:
        iteration_count: 反復回数.

    Returns:
        片側あたりの除去件数.
    """
    return max(iteration_count // 10 // 2, 1)


def can_trim(sample_count: int, trim_count: int) -> bool:
    """除去後に1件以上残るかどうか."""
    return sample_count > 2 * trim_count


def trim_samples(sorted_values: Sequence[int], trim_count: int) -> List[int]:
    """昇順の計測値から両端を除去する.

    除去すると1件も残らない場合は除去せずに返す.

    Args:
        sorted_values: 昇順に並んだ計測値.
        trim_count: 片側あたりの除去件数.

    Returns:
        除去後の計測値.
    """
    if trim_count <= 0 or not can_trim(len(sorted_values), trim_count):
        return list(sorted_values)
    return list(sorted_values[trim_count : len(sorted_values) - trim_count])


def compute_average(values: Sequence[int], use_float: bool = False) -> StatValue:
    """平均値を計算する.

    Args:
        values: 計測値.
        use_float: True の場合は浮動小数で, False の場合は整数除算で計算する.

    Returns:
        平均値.

    Raises:
        ValueError: 計測値が空の場合.
    """
    if len(values) == 0:
        raise ValueError("空の計測値から平均値は計算できません.")
    total = sum(values)
    if use_float:
        return total / len(values)
    return total // len(values)


def compute_median(values: Sequence[int], use_float: bool = False) -> StatValue:
    """中央値を計算する.

    偶数件の場合は中央の2件の平均を返す.

    Args:
        values: 計測値. 並び順は問わない.
        use_float: True の場合は浮動小数で, False の場合は整数除算で計算する.

    Returns:
        中央値.

    Raises:
        ValueError: 計測値が空の場合.
    """
    if len(values) == 0:
        raise ValueError("空の計測値から中央値は計算できません.")
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[middle]
    pair_sum = ordered[middle - 1] + ordered[middle]
    if use_float:
        return pair_sum / 2
    return pair_sum // 2


def compute_trimmed_statistics(
    series: CommandTimingSeries, iteration_count: int, use_float: bool = False
) -> TrimmedStatistics:
    """1コマンド分の系列から外れ値除去後の統計値を計算する.

    Args:
        series: 計測値の系列.
        iteration_count: 反復回数. 除去件数の算出に使う.
        use_float: 浮動小数で計算するかどうか.

    Returns:
        統計値.
    """
    ordered = series.sorted_milliseconds()
    trim_count = compute_trim_count(iteration_count)
    if not can_trim(len(ordered), trim_count):
        trim_count = 0
    remaining = trim_samples(ordered, trim_count)
    return TrimmedStatistics(
        average=compute_average(remaining, use_float),
        median=compute_median(remaining, use_float),
        sample_count=len(remaining),
        trimmed_per_side=trim_count,
    )
