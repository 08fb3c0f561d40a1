"""ベンチマーク実行の共通ユーティリティ."""

from __future__ import annotations

import logging

from perfsuite.logging import LoggerManager, LogLevel

LOGGER_NAME = "perfsuite.benchmark"


def configure_logger(debug: bool = False, color: bool = True) -> logging.Logger:
    """ベンチマーク用ロガーを初期化して返す.

    Args:
        debug: デバッグログを有効化するかどうか.
        color: 色付き出力を行うかどうか.

    Returns:
        構成済みロガー.
    """
    manager = LoggerManager()
    level = LogLevel.DEBUG if debug else LogLevel.INFO
    manager.set_color_enabled(color)
    manager.set_default_level(level)
    logger = manager.get_logger(LOGGER_NAME, level=level)
    manager.set_logger_level(LOGGER_NAME, level)
    return logger
