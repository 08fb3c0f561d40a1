"""ベンチマーク実行設定と計測結果の型定義."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

PLACEHOLDER = "."
NS_PER_MS = 1_000_000

StatValue = Union[int, float]


class UsageError(ValueError):
    """コマンドライン指定が不正な場合の例外."""


@dataclass(frozen=True)
class RunConfiguration:
    """ベンチマーク対象コマンドの設定.

    `commands`, `working_directories`, `command_arguments` はインデックスで
    対応する並列リストとして扱う.
    """

    iteration_count: int
    commands: Tuple[str, ...]
    working_directories: Tuple[str, ...]
    command_arguments: Tuple[str, ...] = ()

    def validate(self) -> None:
        """構造上の整合性を検証する.

        Raises:
            UsageError: 反復回数やリスト長が不正な場合.
        """
        if self.iteration_count < 1:
            raise UsageError(
                f"反復回数は1以上である必要があります: {self.iteration_count}"
            )
        if len(self.commands) == 0:
            raise UsageError("--commands に1件以上のコマンドが必要です.")
        if len(self.working_directories) != len(self.commands):
            raise UsageError(
                "--wdirectories の件数が --commands と一致しません: "
                f"commands={len(self.commands)} "
                f"wdirectories={len(self.working_directories)}"
            )
        if len(self.command_arguments) > len(self.commands):
            raise UsageError(
                "--args の件数が --commands より多くなっています: "
                f"commands={len(self.commands)} args={len(self.command_arguments)}"
            )

    def working_directory_for(self, index: int) -> Optional[str]:
        """コマンドの作業ディレクトリを返す.

        Args:
            index: コマンドのインデックス.

        Returns:
            作業ディレクトリ. `.` の場合は None (カレントディレクトリのまま).
        """
        directory = self.working_directories[index]
        if directory == PLACEHOLDER:
            return None
        return directory

    def arguments_for(self, index: int) -> Optional[str]:
        """コマンドの引数文字列を返す.

        Args:
            index: コマンドのインデックス.

        Returns:
            引数文字列. `.` または未指定の場合は None.
        """
        if index >= len(self.command_arguments):
            return None
        arguments = self.command_arguments[index]
        if arguments == PLACEHOLDER or not arguments.strip():
            return None
        return arguments


@dataclass(frozen=True)
class RunOptions:
    """ベンチ実行時のオプション."""

    timeout_seconds: Optional[float] = None
    use_float: bool = False
    use_shell: bool = False
    debug: bool = False
    color: bool = True


@dataclass(frozen=True)
class DurationSample:
    """1回の起動で計測した経過時間 (ミリ秒)."""

    milliseconds: int

    def __post_init__(self) -> None:
        """負の経過時間を拒否する."""
        if self.milliseconds < 0:
            raise ValueError(f"経過時間が負の値です: {self.milliseconds}")

    @classmethod
    def from_elapsed_ns(cls, elapsed_ns: int) -> "DurationSample":
        """ナノ秒の差分から作成する. ミリ秒未満は切り捨てる."""
        return cls(milliseconds=elapsed_ns // NS_PER_MS)


@dataclass
class CommandTimingSeries:
    """1コマンド分の計測値の系列."""

    command: str
    samples: List[DurationSample] = field(default_factory=list)

    def append(self, sample: DurationSample) -> None:
        """計測値を末尾に追加する."""
        self.samples.append(sample)

    def sorted_milliseconds(self) -> List[int]:
        """計測値を昇順に並べたミリ秒リストを返す."""
        return sorted(sample.milliseconds for sample in self.samples)

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class TrimmedStatistics:
    """外れ値除去後の統計値."""

    average: StatValue
    median: StatValue
    sample_count: int
    trimmed_per_side: int


@dataclass(frozen=True)
class LaunchSpec:
    """子プロセス起動の構造化設定.

    `shell_command` が設定されている場合はシェル経由で起動し,
    `argv` は表示用途にのみ使う.
    """

    argv: Tuple[str, ...]
    cwd: Optional[str] = None
    shell_command: Optional[str] = None

    def describe(self) -> str:
        """ログ表示用の文字列を返す."""
        if self.shell_command is not None:
            return self.shell_command
        return " ".join(self.argv)


@dataclass(frozen=True)
class LaunchOutcome:
    """子プロセス起動の結果."""

    returncode: Optional[int]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """正常終了したかどうか."""
        return self.error is None and self.returncode == 0


@dataclass(frozen=True)
class BenchmarkResult:
    """ベンチマーク全体の結果."""

    iteration_count: int
    series: Tuple[CommandTimingSeries, ...]
    statistics: Tuple[TrimmedStatistics, ...]
