"""コマンドライン引数の状態遷移パーサー.

`--commands` などの可変長リストを扱うため argparse は使わず,
トークン列を1つずつ状態遷移で処理する.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Sequence

from perfsuite.benchmark.models import RunConfiguration, RunOptions, UsageError

FLAG_PREFIX = "-"
DEFAULT_ITERATIONS = 10


class ParserState(Enum):
    """パーサーの状態."""

    START = auto()
    EXPECT_ITERATIONS = auto()
    EXPECT_TIMEOUT = auto()
    COLLECTING_COMMANDS = auto()
    COLLECTING_DIRS = auto()
    COLLECTING_ARGS = auto()


# 値を伴うフラグ → 次の状態
STATE_FLAGS: Dict[str, ParserState] = {
    "--iterations": ParserState.EXPECT_ITERATIONS,
    "-i": ParserState.EXPECT_ITERATIONS,
    "--timeout": ParserState.EXPECT_TIMEOUT,
    "--commands": ParserState.COLLECTING_COMMANDS,
    "--wdirectories": ParserState.COLLECTING_DIRS,
    "--args": ParserState.COLLECTING_ARGS,
}

SWITCH_FLAGS = ("--float", "--shell", "--debug", "--no-color")

RECOGNIZED_FLAGS = frozenset(STATE_FLAGS) | frozenset(SWITCH_FLAGS)


@dataclass(frozen=True)
class ParsedArguments:
    """解析済みのコマンドライン指定."""

    config: RunConfiguration
    options: RunOptions


def parse_iteration_count(token: str) -> int:
    """反復回数トークンを検証して整数に変換する.

    Args:
        token: コマンドライン上の値.

    Returns:
        反復回数.

    Raises:
        UsageError: 10進数字以外を含む場合, または 0 の場合.
    """
    if not token or not all(char in "0123456789" for char in token):
        raise UsageError(f"反復回数は数字のみで指定してください: {token}")
    value = int(token)
    if value < 1:
        raise UsageError(f"反復回数は1以上の整数を指定してください: {token}")
    return value


def parse_timeout(token: str) -> float:
    """タイムアウト秒数トークンを検証する."""
    try:
        value = float(token)
    except ValueError:
        raise UsageError(f"タイムアウトは秒数で指定してください: {token}") from None
    if not value > 0:
        raise UsageError(f"タイムアウトは正の値を指定してください: {token}")
    return value


def strip_quotes(token: str) -> str:
    """前後を囲むダブルクォートを1組だけ取り除く."""
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1]
    return token


def is_argument_token(token: str) -> bool:
    """--args の値として取り込むトークンかどうか.

    認識済みフラグと, 空白を含まない `--` 始まりの未知トークン (打ち間違えた
    オプション) は値にしない. `-c pass` や `--color=auto -v` は値として扱う.
    `--version` 単体を渡す場合は `'"--version"'` のようにクォートを残す.
    """
    if token in RECOGNIZED_FLAGS:
        return False
    return not (token.startswith("--") and len(token.split()) == 1)


def check_argument_strings(config: RunConfiguration) -> None:
    """引数文字列がシェル規則で分割できるか検証する.

    Raises:
        UsageError: クォートの対応が取れていない場合.
    """
    for index in range(len(config.commands)):
        arguments = config.arguments_for(index)
        if arguments is None:
            continue
        try:
            shlex.split(arguments)
        except ValueError as exc:
            raise UsageError(
                f"--args の値を分割できません ({exc}): {arguments}"
            ) from None


class ArgumentParser:
    """トークン列から実行設定を組み立てる有限状態パーサー."""

    def __init__(self) -> None:
        """パーサーを初期化."""
        self._state = ParserState.START
        self._pending_flag: Optional[str] = None
        self._iterations = DEFAULT_ITERATIONS
        self._timeout: Optional[float] = None
        self._commands: List[str] = []
        self._directories: List[str] = []
        self._arguments: List[str] = []
        self._switches: Dict[str, bool] = {flag: False for flag in SWITCH_FLAGS}

    def parse(self, tokens: Sequence[str]) -> ParsedArguments:
        """トークン列を解析する.

        Args:
            tokens: プログラム名を除いたコマンドライン引数.

        Returns:
            解析済みの設定.

        Raises:
            UsageError: 文法または内容が不正な場合.
        """
        for token in tokens:
            self._feed(token)

        if self._state in (ParserState.EXPECT_ITERATIONS, ParserState.EXPECT_TIMEOUT):
            raise UsageError(f"{self._pending_flag} の値が指定されていません.")

        config = RunConfiguration(
            iteration_count=self._iterations,
            commands=tuple(self._commands),
            working_directories=tuple(self._directories),
            command_arguments=tuple(self._arguments),
        )
        config.validate()
        if not self._switches["--shell"]:
            check_argument_strings(config)
        options = RunOptions(
            timeout_seconds=self._timeout,
            use_float=self._switches["--float"],
            use_shell=self._switches["--shell"],
            debug=self._switches["--debug"],
            color=not self._switches["--no-color"],
        )
        return ParsedArguments(config=config, options=options)

    def _feed(self, token: str) -> None:
        state = self._state

        if state is ParserState.EXPECT_ITERATIONS:
            self._iterations = parse_iteration_count(token)
            self._state = ParserState.START
        elif state is ParserState.EXPECT_TIMEOUT:
            self._timeout = parse_timeout(token)
            self._state = ParserState.START
        elif state is ParserState.COLLECTING_ARGS and is_argument_token(token):
            self._arguments.append(strip_quotes(token))
        elif state is ParserState.COLLECTING_COMMANDS and not token.startswith(
            FLAG_PREFIX
        ):
            self._commands.append(token)
        elif state is ParserState.COLLECTING_DIRS and not token.startswith(
            FLAG_PREFIX
        ):
            self._directories.append(token)
        else:
            self._handle_flag(token)

    def _handle_flag(self, token: str) -> None:
        if token in STATE_FLAGS:
            self._pending_flag = token
            self._state = STATE_FLAGS[token]
        elif token in self._switches:
            self._switches[token] = True
            self._state = ParserState.START
        elif token.startswith(FLAG_PREFIX):
            raise UsageError(f"不明なオプションです: {token}")
        else:
            raise UsageError(f"オプションに属さない値です: {token}")


def parse_arguments(tokens: Sequence[str]) -> ParsedArguments:
    """トークン列を解析して実行設定を返す.

    Args:
        tokens: プログラム名を除いたコマンドライン引数.

    Returns:
        解析済みの設定.
    """
    return ArgumentParser().parse(tokens)
