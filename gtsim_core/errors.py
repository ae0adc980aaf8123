from __future__ import annotations

import logging
import traceback
from typing import Any, Optional, Tuple

from gtsim_core.domain.models import Notification

logger = logging.getLogger(__name__)

ERROR_TOAST_MS = 5000

FRIENDLY_MESSAGES = {
    "auth/invalid-email": "请输入有效的邮箱地址",
    "auth/weak-password": "密码强度不够，请至少包含8个字符",
    "auth/email-already-in-use": "该邮箱已被注册",
    "auth/user-not-found": "用户不存在",
    "auth/wrong-password": "密码错误",
    "auth/too-many-requests": "登录尝试次数过多，请稍后再试",
    "network-error": "网络连接失败，请检查网络设置",
    "server-error": "服务器错误，请稍后再试",
}

DEFAULT_MESSAGE = "操作失败，请重试"


class AppError(Exception):
    """Error carrying an optional machine-readable code and diagnostic details."""

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details


class StoreError(AppError):
    """Raised by row stores when a query or delete cannot be completed."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, code="network-error", details=details)


class RecordFormatError(AppError):
    """Raised when a stored row cannot be mapped to a result record."""


def to_app_error(error: Any) -> AppError:
    if isinstance(error, AppError):
        return error
    if isinstance(error, Exception):
        app_error = AppError(str(error))
        app_error.__cause__ = error
        return app_error
    if isinstance(error, str):
        return AppError(error)
    return AppError("An unexpected error occurred")


def friendly_message(error: AppError) -> str:
    if error.code and error.code in FRIENDLY_MESSAGES:
        return FRIENDLY_MESSAGES[error.code]
    return error.message or DEFAULT_MESSAGE


def handle_error(error: Any) -> Tuple[AppError, Notification]:
    """
    Normalize any raised value into an AppError, log its details and build
    the user-facing notification for it.
    """
    app_error = to_app_error(error)
    source = app_error.__cause__ or app_error
    stack = "".join(traceback.format_exception(type(source), source, source.__traceback__))
    logger.error(
        "Error details: message=%s code=%s details=%r\n%s",
        app_error.message,
        app_error.code,
        app_error.details,
        stack,
    )
    notification = Notification(type="error", message=friendly_message(app_error), duration=ERROR_TOAST_MS)
    return app_error, notification
