"""
后端服务客户端
封装 Supabase（PostgREST + GoTrue）的通用记录操作：查询、新增、更新、删除
所有请求都带上当前用户的访问令牌，数据归属由后端行级安全策略保证
"""

from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

import httpx
import pydantic

from src.utils.config import settings
from src.utils.errors import AuthenticationError, BackendError, NotFoundError
from src.utils.logger import logger

# 过滤条件：列名 -> 值（等值匹配）或 (操作符, 值)
FilterValue = Union[Any, Tuple[str, Any]]

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _encode_value(value: Any) -> str:
    """将 Python 值编码为 PostgREST 查询参数"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def build_filters(filters: Optional[Dict[str, FilterValue]]) -> Dict[str, str]:
    """
    构建 PostgREST 过滤参数

    Args:
        filters: {"user_id": "u1", "entry_date": ("gte", date(2024, 1, 1))}

    Returns:
        {"user_id": "eq.u1", "entry_date": "gte.2024-01-01"}
    """
    params: Dict[str, str] = {}
    for column, condition in (filters or {}).items():
        if isinstance(condition, tuple):
            operator, value = condition
        elif condition is None:
            operator, value = "is", None
        else:
            operator, value = "eq", condition
        params[column] = f"{operator}.{_encode_value(value)}"
    return params


class SupabaseClient:
    """后端服务客户端管理类"""

    _instance = None

    def __new__(cls):
        """单例模式，确保全局只有一个客户端配置"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.configure()
        return cls._instance

    def configure(self, base_url: Optional[str] = None, api_key: Optional[str] = None,
                  timeout: Optional[float] = None,
                  transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """
        (重新)绑定客户端配置

        Args:
            base_url: 后端地址，默认使用配置中的地址
            api_key: 匿名 API Key
            timeout: 请求超时时间（秒）
            transport: 自定义 httpx 传输层
        """
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key or settings.supabase_anon_key
        self.timeout = timeout or settings.request_timeout
        self.transport = transport

    def is_configured(self) -> bool:
        """
        检查后端配置是否完整

        Returns:
            配置是否完整
        """
        return all([self.base_url, self.api_key])

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, token: Optional[str],
                       params: Optional[Dict[str, str]] = None,
                       json: Any = None,
                       headers: Optional[Dict[str, str]] = None) -> Any:
        """
        发送请求并解析响应

        Returns:
            解析后的 JSON，响应体为空时返回 None

        Raises:
            BackendError: 网络异常或后端返回非 2xx
        """
        if not self.is_configured():
            raise BackendError("Backend is not configured")

        request_headers = self._headers(token)
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                         transport=self.transport) as client:
                response = await client.request(method, path, params=params,
                                                json=json, headers=request_headers)
        except httpx.HTTPError as e:
            logger.error(f"后端请求异常: {method} {path} - {e}")
            raise BackendError("Could not reach the server, please try again") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(f"后端请求失败: {method} {path} - {response.status_code} {message}")
            if response.status_code == 401:
                raise AuthenticationError(message)
            raise BackendError(message)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"后端响应无法解析: {method} {path} - {response.text[:200]}")
            raise BackendError("Received an unreadable response from the server") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """从后端错误响应中提取可读信息"""
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Request failed: {response.status_code}"
        if isinstance(body, dict):
            for key in ("message", "msg", "error_description", "error"):
                if body.get(key):
                    return str(body[key])
        return f"Request failed: {response.status_code}"

    async def select(self, table: str, token: str,
                     filters: Optional[Dict[str, FilterValue]] = None,
                     order: Optional[str] = None,
                     limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        查询记录列表

        Args:
            table: 集合名称
            token: 用户访问令牌
            filters: 过滤条件
            order: 排序，例如 "created_at.desc"
            limit: 数量限制

        Returns:
            记录列表
        """
        params = build_filters(filters)
        params["select"] = "*"
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        rows = await self._request("GET", f"/rest/v1/{table}", token, params=params)
        return rows or []

    async def select_one(self, table: str, token: str,
                         filters: Optional[Dict[str, FilterValue]] = None,
                         order: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """查询单条记录，不存在时返回 None"""
        rows = await self.select(table, token, filters=filters, order=order, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, token: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        新增记录

        Returns:
            后端生成的完整记录（包含 id、created_at）
        """
        rows = await self._request(
            "POST", f"/rest/v1/{table}", token,
            json=values,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise BackendError("Server did not return the saved record")
        return rows[0] if isinstance(rows, list) else rows

    async def update(self, table: str, token: str, record_id: str,
                     values: Dict[str, Any]) -> Dict[str, Any]:
        """
        按 ID 更新记录

        Raises:
            NotFoundError: 记录不存在或无权访问
        """
        rows = await self._request(
            "PATCH", f"/rest/v1/{table}", token,
            params=build_filters({"id": record_id}),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise NotFoundError("Record not found")
        return rows[0]

    async def delete(self, table: str, token: str, record_id: str) -> bool:
        """
        按 ID 删除记录

        Returns:
            是否删除了记录
        """
        rows = await self._request(
            "DELETE", f"/rest/v1/{table}", token,
            params=build_filters({"id": record_id}),
            headers={"Prefer": "return=representation"},
        )
        return bool(rows)

    async def get_user(self, token: str) -> Dict[str, Any]:
        """
        根据访问令牌获取当前用户

        Raises:
            AuthenticationError: 令牌无效或已过期
        """
        if not token:
            raise AuthenticationError("Please log in first")
        user = await self._request("GET", "/auth/v1/user", token)
        if not user or not user.get("id"):
            raise AuthenticationError("Please log in first")
        return user


def parse_record(model: Type[ModelT], row: Any) -> ModelT:
    """
    将后端返回的记录转换为模型

    Raises:
        BackendError: 记录缺少字段或类型不符
    """
    try:
        return model.model_validate(row)
    except pydantic.ValidationError as e:
        logger.error(f"后端记录格式异常: {model.__name__} {row!r} - {e}")
        raise BackendError("Received an unexpected record from the server") from e


# 创建全局后端客户端实例
backend_client = SupabaseClient()
