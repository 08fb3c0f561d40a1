"""
perfsuite.logging.logger_manager: ログ管理マネージャー.

colorlogを使用したオブジェクト指向のログ管理システム
"""

import logging
from enum import Enum
from typing import Dict, Optional

import colorlog


class LevelBasedFormatter(logging.Formatter):
    """デバッグモードによって切り替わるログ形式."""

    def __init__(
        self,
        info_format: str,
        debug_format: str,
        datefmt: str,
        use_color: bool = True,
        log_colors: Optional[Dict[str, str]] = None,
        force_debug_format: bool = False,
    ) -> None:
        """ログ整形の初期化."""
        super().__init__(datefmt=datefmt)
        self._force_debug_format = force_debug_format
        self._info_formatter = colorlog.ColoredFormatter(
            info_format,
            datefmt=datefmt,
            log_colors=log_colors or {},
            no_color=not use_color,
        )
        self._debug_formatter = colorlog.ColoredFormatter(
            debug_format,
            datefmt=datefmt,
            log_colors=log_colors or {},
            no_color=not use_color,
        )

    def format(self, record: logging.LogRecord) -> str:
        """ログレコードを整形."""
        record.levelname = {"WARNING": "WARN"}.get(record.levelname, record.levelname)
        if self._force_debug_format:
            return str(self._debug_formatter.format(record))
        return str(self._info_formatter.format(record))


class LogLevel(Enum):
    """ログレベル列挙型."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggerManager:
    """
    ログ管理マネージャークラス.

    colorlogを使用したカラフルなログ出力を管理し、
    アプリケーション全体で一貫したログ設定を提供

    Attributes:
        _loggers (Dict[str, logging.Logger]): 管理されているロガーの辞書
        _default_level (LogLevel): デフォルトのログレベル
        _use_color (bool): 色付き出力を行うかどうか
    """

    _instance: Optional["LoggerManager"] = None
    _loggers: Dict[str, logging.Logger] = {}

    def __new__(cls) -> "LoggerManager":
        """シングルトンパターンの実装."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """LoggerManagerを初期化."""
        if hasattr(self, "_initialized"):
            return

        self._default_level = LogLevel.INFO
        self._use_debug_format = False
        self._use_color = True
        self._info_format = (
            "%(asctime)s|%(log_color)s%(levelname)-5.5s%(reset)s| %(message)s"
        )
        self._debug_format = (
            "%(asctime)s|%(log_color)s%(levelname)-5.5s%(reset)s|"
            "%(filename)-20s|%(lineno)03d| %(message)s"
        )
        self._date_format = "%Y-%m-%d %H:%M:%S"
        self._log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARN": "yellow",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        }
        self._initialized = True

    def get_logger(self, name: str, level: Optional[LogLevel] = None) -> logging.Logger:
        """
        指定された名前のロガーを取得または作成.

        Args:
            name (str): ロガー名
            level (LogLevel, optional): ログレベル

        Returns:
            logging.Logger: 設定されたロガー

        Examples:
            >>> manager = LoggerManager()
            >>> logger = manager.get_logger("perfsuite")
            >>> logger.info("ログメッセージ")
            2026-10-19 18:37:48|INFO | ログメッセージ
        """
        if name in self._loggers:
            return self._loggers[name]

        logger = self._create_logger(name, level or self._default_level)
        self._loggers[name] = logger
        return logger

    def _create_logger(self, name: str, level: LogLevel) -> logging.Logger:
        """
        新しいロガーを作成.

        Args:
            name (str): ロガー名
            level (LogLevel): ログレベル

        Returns:
            logging.Logger: 作成されたロガー
        """
        logger = logging.getLogger(name)

        # 既にハンドラーが設定されている場合はそのまま返す
        if logger.handlers:
            return logger

        logger.setLevel(getattr(logging, level.value))
        logger.addHandler(self._create_handler())

        # 親ロガーへの伝播を防ぐ
        logger.propagate = False

        return logger

    def _create_handler(self) -> logging.Handler:
        """
        ログハンドラーを作成.

        Returns:
            logging.Handler: 作成されたハンドラー
        """
        handler = colorlog.StreamHandler()
        handler.setFormatter(
            LevelBasedFormatter(
                self._info_format,
                self._debug_format,
                datefmt=self._date_format,
                use_color=self._use_color,
                log_colors=self._log_colors,
                force_debug_format=self._use_debug_format,
            )
        )
        return handler

    def set_default_level(self, level: LogLevel) -> None:
        """
        デフォルトのログレベルを設定.

        Args:
            level (LogLevel): 新しいデフォルトレベル
        """
        self._default_level = level
        self._use_debug_format = level == LogLevel.DEBUG
        self._update_existing_handlers_format()

    def set_color_enabled(self, enabled: bool) -> None:
        """
        色付き出力の有無を設定.

        既存ロガーのハンドラーにも反映する.

        Args:
            enabled (bool): 色付き出力を行う場合True
        """
        if self._use_color == enabled:
            return
        self._use_color = enabled
        for logger in self._loggers.values():
            for handler in logger.handlers:
                if isinstance(handler.formatter, LevelBasedFormatter):
                    handler.setFormatter(
                        LevelBasedFormatter(
                            self._info_format,
                            self._debug_format,
                            datefmt=self._date_format,
                            use_color=enabled,
                            log_colors=self._log_colors,
                            force_debug_format=self._use_debug_format,
                        )
                    )

    def _update_existing_handlers_format(self) -> None:
        """既存ハンドラーのフォーマット設定を更新する."""
        for logger in self._loggers.values():
            for handler in logger.handlers:
                formatter = handler.formatter
                if isinstance(formatter, LevelBasedFormatter):
                    formatter._force_debug_format = self._use_debug_format

    def set_logger_level(self, name: str, level: LogLevel) -> None:
        """
        特定のロガーのレベルを設定.

        Args:
            name (str): ロガー名
            level (LogLevel): 新しいログレベル
        """
        if name in self._loggers:
            self._loggers[name].setLevel(getattr(logging, level.value))

    def get_available_loggers(self) -> list[str]:
        """
        管理されているロガーの名前一覧を取得.

        Returns:
            list[str]: ロガー名のリスト
        """
        return list(self._loggers.keys())

    def is_color_enabled(self) -> bool:
        """色付き出力が有効か返す."""
        return self._use_color

    @classmethod
    def reset(cls) -> None:
        """シングルトンインスタンスをリセット（主にテスト用）."""
        for logger in cls._loggers.values():
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
        cls._instance = None
        cls._loggers.clear()
