"""ベンチマーク対象コマンドの起動と計測処理."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Callable, List, Optional

from perfsuite.benchmark.clock import IClock, MonotonicClock
from perfsuite.benchmark.models import (
    BenchmarkResult,
    CommandTimingSeries,
    DurationSample,
    LaunchOutcome,
    LaunchSpec,
    RunConfiguration,
    RunOptions,
)
from perfsuite.benchmark.statistics import (
    can_trim,
    compute_trim_count,
    compute_trimmed_statistics,
)

LOGGER = logging.getLogger("perfsuite.benchmark")

Launcher = Callable[[LaunchSpec, Optional[float]], LaunchOutcome]


def build_launch(
    config: RunConfiguration, index: int, options: Optional[RunOptions] = None
) -> LaunchSpec:
    """コマンド起動用の構造化設定を構築する.

    Args:
        config: 実行設定.
        index: コマンドのインデックス.
        options: 実行オプション.

    Returns:
        起動設定.
    """
    command = config.commands[index]
    arguments = config.arguments_for(index)
    cwd = config.working_directory_for(index)

    if options is not None and options.use_shell:
        shell_command = command if arguments is None else f"{command} {arguments}"
        return LaunchSpec(argv=(command,), cwd=cwd, shell_command=shell_command)

    argv: List[str] = [command]
    if arguments is not None:
        argv.extend(shlex.split(arguments))
    return LaunchSpec(argv=tuple(argv), cwd=cwd)


def launch_process(
    launch: LaunchSpec, timeout: Optional[float] = None
) -> LaunchOutcome:
    """子プロセスを起動し, 終了まで待機する.

    標準出力は破棄する. 起動失敗やタイムアウトは例外にせず結果として返す.

    Args:
        launch: 起動設定.
        timeout: タイムアウト秒数. None の場合は無制限.

    Returns:
        起動結果.
    """
    try:
        if launch.shell_command is not None:
            completed = subprocess.run(
                launch.shell_command,
                shell=True,
                cwd=launch.cwd,
                stdout=subprocess.DEVNULL,
                timeout=timeout,
                check=False,
            )
        else:
            completed = subprocess.run(
                list(launch.argv),
                cwd=launch.cwd,
                stdout=subprocess.DEVNULL,
                timeout=timeout,
                check=False,
            )
    except subprocess.TimeoutExpired:
        return LaunchOutcome(returncode=None, error=f"{timeout}秒でタイムアウトしました")
    except OSError as exc:
        return LaunchOutcome(returncode=None, error=f"起動に失敗しました: {exc}")

    if completed.returncode != 0:
        return LaunchOutcome(
            returncode=completed.returncode,
            error=f"non-zero exit code: {completed.returncode}",
        )
    return LaunchOutcome(returncode=0)


class BenchmarkRunner:
    """コマンドを指定回数ずつ順番に実行して経過時間を計測するランナー.

    Args:
        clock: 時刻源. 省略時は `MonotonicClock`.
        launcher: 子プロセス起動関数. 省略時は `launch_process`.
        options: 実行オプション.
    """

    def __init__(
        self,
        clock: Optional[IClock] = None,
        launcher: Optional[Launcher] = None,
        options: Optional[RunOptions] = None,
    ) -> None:
        """ランナーを初期化."""
        self._clock = clock or MonotonicClock()
        self._launcher = launcher or launch_process
        self._options = options or RunOptions()

    def run(self, config: RunConfiguration) -> BenchmarkResult:
        """全コマンドを計測し, 統計値を計算する.

        子プロセスの失敗は計測を中断せず, 経過時間はそのまま記録する.

        Args:
            config: 実行設定.

        Returns:
            ベンチマーク結果.
        """
        config.validate()
        launches = [
            build_launch(config, index, self._options)
            for index in range(len(config.commands))
        ]
        series = [CommandTimingSeries(command=command) for command in config.commands]

        for iteration in range(config.iteration_count):
            for index, launch in enumerate(launches):
                LOGGER.debug(
                    "iteration=%s/%s cwd=%s command=%s",
                    iteration + 1,
                    config.iteration_count,
                    launch.cwd or ".",
                    launch.describe(),
                )
                start = self._clock.now()
                outcome = self._launcher(launch, self._options.timeout_seconds)
                end = self._clock.now()

                sample = DurationSample.from_elapsed_ns(max(end - start, 0))
                series[index].append(sample)

                if not outcome.ok:
                    LOGGER.warning(
                        "実行異常 command=%s iteration=%s/%s error=%s",
                        config.commands[index],
                        iteration + 1,
                        config.iteration_count,
                        outcome.error,
                    )

        trim_count = compute_trim_count(config.iteration_count)
        if not can_trim(config.iteration_count, trim_count):
            LOGGER.warning(
                "反復回数 %s では外れ値を除去できないため, 全計測値で統計を計算します.",
                config.iteration_count,
            )

        statistics = tuple(
            compute_trimmed_statistics(
                item, config.iteration_count, use_float=self._options.use_float
            )
            for item in series
        )
        return BenchmarkResult(
            iteration_count=config.iteration_count,
            series=tuple(series),
            statistics=statistics,
        )
