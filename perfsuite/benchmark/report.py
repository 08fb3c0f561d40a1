"""ベンチマーク結果のコンソール出力整形."""

from __future__ import annotations

from typing import List

from perfsuite.benchmark.models import BenchmarkResult, StatValue

DIVIDER = "========================"


def _format_value(value: StatValue, use_float: bool) -> str:
    if use_float:
        return f"{float(value):.3f}"
    return str(int(value))


def format_report(result: BenchmarkResult, use_float: bool = False) -> str:
    """ベンチマーク結果をコマンドごとのレポート文字列にする.

    Args:
        result: ベンチマーク結果.
        use_float: 小数点以下3桁で表示するかどうか.

    Returns:
        出力用文字列.
    """
    lines: List[str] = ["", "", f"Nr Of Iterations: {result.iteration_count}"]
    for series, stats in zip(result.series, result.statistics):
        lines.append(f"{series.command} Times:")
        lines.append("")
        lines.append(f"Average (ms): {_format_value(stats.average, use_float)}")
        lines.append(f"Median (ms): {_format_value(stats.median, use_float)}")
        lines.append("")
        lines.append(DIVIDER)
    return "\n".join(lines)
