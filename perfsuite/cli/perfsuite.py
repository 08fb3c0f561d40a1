"""コマンド実行時間ベンチマーク CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from perfsuite.benchmark.models import UsageError
from perfsuite.benchmark.report import format_report
from perfsuite.benchmark.runner import BenchmarkRunner
from perfsuite.benchmark.utils import configure_logger
from perfsuite.cli.arg_parser import parse_arguments

LOGGER = logging.getLogger("perfsuite.benchmark")
MIN_NR_OF_ARGS = 5

HELP_TEXT = """\
Command Line Format:
perfsuite [--iterations N | -i N] --commands <cmd_1> <cmd_2> <cmd_N> --wdirectories <wdir_1> <wdir_2> <wdir_N> --args "<args_1>" "<args_2>" "<args_N>"

command line options:
--iterations [N]    number of times to run commands (default 10)
-i [N]              number of times to run commands
--commands          list of commands to execute, these can be absolute paths to executables or commands found on PATH
--wdirectories      list of working directories from which to execute commands. Working directory indices are the same as command indices. Current working directory can be selected as '.', there must be as many working directories as commands
--args              command line arguments to pass to the respective commands. No command line arguments is selected as '.'
--timeout [S]       abort a single invocation after S seconds (the elapsed time is still recorded)
--float             report average and median as floating point values
--shell             run commands through the system shell (for shell built-ins)
--debug             enable debug logging
--no-color          disable colored log output

Commands and directories starting with '-' cannot be specified.

Example: perfsuite -i 10 --commands /usr/bin/grep python --wdirectories . /tmp --args "-r foo ." "-c pass"
"""


def print_help() -> None:
    """ヘルプを標準出力へ表示する."""
    print(HELP_TEXT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """エントリポイント.

    Args:
        argv: 解析対象引数. 省略時は `sys.argv`.

    Returns:
        終了コード.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)

    if len(tokens) < MIN_NR_OF_ARGS:
        print("Not enough arguments")
        print_help()
        return 1

    try:
        parsed = parse_arguments(tokens)
    except UsageError as exc:
        print(f"Wrong usage of arguments: {exc}")
        print_help()
        return 1

    configure_logger(debug=parsed.options.debug, color=parsed.options.color)
    LOGGER.debug("config=%s options=%s", parsed.config, parsed.options)

    try:
        result = BenchmarkRunner(options=parsed.options).run(parsed.config)
    except Exception as exc:
        LOGGER.error("ベンチ実行に失敗しました: %s", exc)
        return 1

    print(format_report(result, use_float=parsed.options.use_float))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
