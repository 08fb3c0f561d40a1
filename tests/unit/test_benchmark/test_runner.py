"""benchmark.runner のテスト.

Fake クロックと Fake ランチャーを注入して, 実プロセスを起動せずに検証する.
"""

import logging
import subprocess
import sys

import pytest

import perfsuite.benchmark.runner as runner_module
from perfsuite.benchmark.models import (
    LaunchOutcome,
    LaunchSpec,
    RunConfiguration,
    RunOptions,
)
from perfsuite.benchmark.runner import BenchmarkRunner, build_launch, launch_process


@pytest.fixture
def propagate_benchmark_logger():
    """caplog で捕捉できるようベンチマークロガーを伝播させる."""
    logger = logging.getLogger("perfsuite.benchmark")
    original = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = original


class TestBuildLaunch:
    """build_launch のテスト."""

    def test_plain_command(self):
        """引数なし・カレントディレクトリのまま."""
        config = RunConfiguration(1, ("tool",), (".",), (".",))
        launch = build_launch(config, 0)

        assert launch.argv == ("tool",)
        assert launch.cwd is None
        assert launch.shell_command is None

    def test_arguments_are_split(self):
        """引数文字列はシェル規則で分割される."""
        config = RunConfiguration(1, ("grep",), ("/data",), ("-r 'two words' .",))
        launch = build_launch(config, 0)

        assert launch.argv == ("grep", "-r", "two words", ".")
        assert launch.cwd == "/data"

    def test_missing_argument_entry(self):
        """引数リストが短い場合は引数なし."""
        config = RunConfiguration(1, ("a", "b"), (".", "."), ("-x",))
        assert build_launch(config, 1).argv == ("b",)

    def test_shell_mode(self):
        """シェルモードではコマンド文字列を連結する."""
        config = RunConfiguration(1, ("echo",), ("/tmp",), ("hello world",))
        launch = build_launch(config, 0, RunOptions(use_shell=True))

        assert launch.shell_command == "echo hello world"
        assert launch.cwd == "/tmp"
        assert launch.describe() == "echo hello world"


class TestBenchmarkRunner:
    """BenchmarkRunner のテスト."""

    def test_runs_each_command_in_order_per_iteration(
        self, fake_clock_factory, fake_launcher
    ):
        """反復ごとに宣言順で全コマンドを起動する."""
        config = RunConfiguration(3, ("a", "b"), (".", "."), (".", "."))
        clock = fake_clock_factory([1, 2, 3, 4, 5, 6])

        result = BenchmarkRunner(clock=clock, launcher=fake_launcher).run(config)

        assert [call[0].argv[0] for call in fake_launcher.calls] == [
            "a",
            "b",
            "a",
            "b",
            "a",
            "b",
        ]
        assert [s.milliseconds for s in result.series[0].samples] == [1, 3, 5]
        assert [s.milliseconds for s in result.series[1].samples] == [2, 4, 6]
        assert result.iteration_count == 3

    def test_statistics_exclude_extremes(self, fake_clock_factory, fake_launcher):
        """20回の計測で最速・最遅が統計から除外される."""
        durations = [100] * 18 + [5, 5000]
        config = RunConfiguration(20, ("sleeper",), (".",))
        clock = fake_clock_factory(durations)

        result = BenchmarkRunner(clock=clock, launcher=fake_launcher).run(config)
        stats = result.statistics[0]

        assert stats.sample_count == 18
        assert stats.average == 100
        assert stats.median == 100

    def test_float_option(self, fake_clock_factory, fake_launcher):
        """--float 相当のオプションで浮動小数の統計になる."""
        config = RunConfiguration(4, ("a",), (".",))
        clock = fake_clock_factory([1, 2, 3, 9])
        runner = BenchmarkRunner(
            clock=clock, launcher=fake_launcher, options=RunOptions(use_float=True)
        )

        stats = runner.run(config).statistics[0]

        assert stats.average == pytest.approx(2.5)
        assert stats.median == pytest.approx(2.5)

    def test_timeout_is_passed_to_launcher(self, fake_clock_factory, fake_launcher):
        """タイムアウト秒数がランチャーへ渡される."""
        config = RunConfiguration(1, ("a",), (".",))
        runner = BenchmarkRunner(
            clock=fake_clock_factory([1]),
            launcher=fake_launcher,
            options=RunOptions(timeout_seconds=2.5),
        )
        runner.run(config)

        assert fake_launcher.calls[0][1] == 2.5

    def test_failures_are_recorded_and_logged(
        self,
        fake_clock_factory,
        fake_launcher_factory,
        caplog,
        propagate_benchmark_logger,
    ):
        """失敗しても経過時間を記録し, 警告ログを出す."""
        launcher = fake_launcher_factory(
            [
                LaunchOutcome(returncode=3, error="non-zero exit code: 3"),
                LaunchOutcome(returncode=0),
                LaunchOutcome(returncode=None, error="起動に失敗しました: missing"),
            ]
        )
        config = RunConfiguration(3, ("broken",), (".",))

        with caplog.at_level(logging.WARNING, logger="perfsuite.benchmark"):
            result = BenchmarkRunner(
                clock=fake_clock_factory([7, 8, 9]), launcher=launcher
            ).run(config)

        assert len(result.series[0]) == 3
        messages = [record.getMessage() for record in caplog.records]
        assert sum("command=broken" in message for message in messages) == 2
        assert any("non-zero exit code: 3" in message for message in messages)

    def test_warns_when_too_few_iterations_to_trim(
        self, fake_clock_factory, fake_launcher, caplog, propagate_benchmark_logger
    ):
        """反復回数が少なく除去できない場合は警告する."""
        config = RunConfiguration(2, ("a",), (".",))

        with caplog.at_level(logging.WARNING, logger="perfsuite.benchmark"):
            result = BenchmarkRunner(
                clock=fake_clock_factory([4, 6]), launcher=fake_launcher
            ).run(config)

        assert result.statistics[0].average == 5
        assert any("外れ値を除去できない" in r.getMessage() for r in caplog.records)

    def test_invalid_configuration_is_rejected_before_execution(
        self, fake_clock_factory, fake_launcher
    ):
        """件数不一致の設定では何も起動しない."""
        config = RunConfiguration(2, ("a", "b"), (".",))

        with pytest.raises(ValueError):
            BenchmarkRunner(
                clock=fake_clock_factory([]), launcher=fake_launcher
            ).run(config)
        assert fake_launcher.calls == []


class TestLaunchProcess:
    """launch_process のテスト (実プロセスを起動する)."""

    def test_success(self):
        """正常終了は ok."""
        outcome = launch_process(LaunchSpec(argv=(sys.executable, "-c", "pass")))
        assert outcome.ok
        assert outcome.returncode == 0

    def test_non_zero_exit(self):
        """非ゼロ終了はエラー扱い."""
        outcome = launch_process(
            LaunchSpec(argv=(sys.executable, "-c", "raise SystemExit(4)"))
        )
        assert not outcome.ok
        assert outcome.returncode == 4

    def test_missing_command(self, tmp_path):
        """存在しないコマンドは例外ではなくエラー結果になる."""
        outcome = launch_process(LaunchSpec(argv=(str(tmp_path / "no-such-tool"),)))
        assert not outcome.ok
        assert outcome.returncode is None
        assert "起動に失敗しました" in (outcome.error or "")

    def test_working_directory(self, tmp_path):
        """作業ディレクトリで起動される."""
        marker = "import pathlib; pathlib.Path('marker.txt').write_text('x')"
        outcome = launch_process(
            LaunchSpec(argv=(sys.executable, "-c", marker), cwd=str(tmp_path))
        )
        assert outcome.ok
        assert (tmp_path / "marker.txt").exists()

    def test_shell_builtin_exit_code(self, tmp_path):
        """シェル経由ではシェル組み込みコマンドの終了コードを返す."""
        outcome = launch_process(
            LaunchSpec(argv=("exit",), cwd=str(tmp_path), shell_command="exit 3")
        )
        assert not outcome.ok
        assert outcome.returncode == 3

    def test_shell_working_directory(self, tmp_path):
        """シェル経由でも作業ディレクトリで実行される."""
        outcome = launch_process(
            LaunchSpec(
                argv=("echo",), cwd=str(tmp_path), shell_command="echo x > marker.txt"
            )
        )
        assert outcome.ok
        assert (tmp_path / "marker.txt").exists()

    def test_shell_mode_end_to_end(self, tmp_path, fake_clock_factory):
        """--shell 相当の設定でランナーからシェル経由で起動される."""
        config = RunConfiguration(2, ("echo",), (str(tmp_path),), ("x > marker.txt",))
        runner = BenchmarkRunner(
            clock=fake_clock_factory([1, 1]), options=RunOptions(use_shell=True)
        )
        result = runner.run(config)

        assert len(result.series[0]) == 2
        assert (tmp_path / "marker.txt").exists()

    def test_timeout(self, monkeypatch):
        """タイムアウトはエラー結果になる."""

        def fake_run(*args, **kwargs):
            raise subprocess.TimeoutExpired(cmd="x", timeout=kwargs["timeout"])

        monkeypatch.setattr(runner_module.subprocess, "run", fake_run)
        outcome = launch_process(LaunchSpec(argv=("x",)), timeout=0.5)

        assert not outcome.ok
        assert "タイムアウト" in (outcome.error or "")

    def test_stdout_is_suppressed(self, monkeypatch):
        """標準出力は DEVNULL へ捨てられる."""
        captured = {}

        def fake_run(*args, **kwargs):
            captured.update(kwargs)
            return subprocess.CompletedProcess(args=args[0], returncode=0)

        monkeypatch.setattr(runner_module.subprocess, "run", fake_run)
        launch_process(LaunchSpec(argv=("x",)))

        assert captured["stdout"] is subprocess.DEVNULL
        assert captured["check"] is False
