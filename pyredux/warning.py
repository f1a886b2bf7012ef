"""
診斷警告輸出。

預設寫入 "pyredux" logger（WARNING 等級），可替換為任意接收單一字串的函數。
"""
import logging
from typing import Callable

WarningSink = Callable[[str], None]

_logger = logging.getLogger("pyredux")


def _log_warning(message: str) -> None:
    _logger.warning(message)


_sink: WarningSink = _log_warning


def warning(message: str) -> None:
    """
    發出一條診斷警告。

    Args:
        message: 警告訊息
    """
    _sink(message)


def set_warning_sink(sink: WarningSink) -> WarningSink:
    """
    替換警告輸出函數。

    Args:
        sink: 接收警告訊息的函數

    Returns:
        先前使用的輸出函數，方便之後還原
    """
    global _sink
    previous = _sink
    _sink = sink
    return previous
