"""
异常定义模块
所有面向用户的错误都会被转换为通知（toast）消息
"""

from typing import Optional


class AppError(Exception):
    """应用异常基类"""

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_notification(self) -> dict:
        """转换为前端通知格式"""
        return {"code": 1, "msg": self.message}


class ValidationError(AppError):
    """字段校验失败"""
    status_code = 400


class AuthenticationError(AppError):
    """用户身份无法识别"""
    status_code = 401


class NotFoundError(AppError):
    """记录不存在"""
    status_code = 404


class BackendError(AppError):
    """后端服务调用失败"""
    status_code = 502
