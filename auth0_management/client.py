"""
Auth0 Management API HTTP Client

使用 httpx 实现，所有 manager 通过 request() 发起调用：
- 每次调用只发一个 HTTP 请求，不重试
- 非 2xx 响应转换为 APIError (带 status / error / message / errorCode)
- 网络错误、超时转换为 TransportError / RequestTimeoutError
- 2xx 但响应体无法解析时抛出 DecodeError
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Union
from urllib.parse import quote

import httpx
from httpx import Client, Response

from .guardian import GuardianManager
from .models import Entity, ManagementError, ModelValidationError
from .options import RequestOption, resolve_options
from .prompt import PromptManager
from .self_service_profile import SelfServiceProfileManager
from .tenant import TenantManager

if TYPE_CHECKING:
    from .config import ClientConfig

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "auth0-management-python/0.1.0"


class ManagementClientError(Exception):
    """客户端错误基类"""
    def __init__(self, message: str, error: ManagementError | None = None):
        super().__init__(message)
        self.error = error


class APIError(ManagementClientError):
    """API 返回非 2xx 响应"""
    def __init__(self, error: ManagementError):
        super().__init__(str(error), error)

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def code(self) -> str:
        """机器可读的错误码 (errorCode)，可能为空"""
        return self.error.error_code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def is_not_found(self) -> bool:
        return self.error.status_code == 404


class TransportError(ManagementClientError):
    """请求未完成 (连接失败、协议错误等)，没有收到响应"""
    pass


class RequestTimeoutError(TransportError):
    """请求超时被中止"""
    pass


class DecodeError(ManagementClientError):
    """2xx 响应体无法解析为预期结构"""
    def __init__(self, message: str, body: bytes = b""):
        super().__init__(message)
        self.body = body


# request() 的 target 参数：
# - None: 返回解析后的 JSON
# - Entity 实例: 原地填充并返回该实例
# - Entity 子类: 构造新实例
# - 其他可调用对象: parse(data)
Target = Union[Entity, type[Entity], Callable[[Any], Any], None]


class ManagementClient:
    """
    Auth0 Management API 客户端

    示例:
        with ManagementClient("example.auth0.com", token) as m:
            profile = m.self_service_profile.read("ssp_123")
            m.guardian.multi_factor.sms.enable(True)

    认证：只使用调用方提供的 access token，不负责获取或刷新。
    """

    API_PATH = "/api/v2/"

    def __init__(
        self,
        domain: str,
        token: str,
        timeout: float = 30.0,
        user_agent: str | None = None,
        http_client: Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        初始化客户端

        Args:
            domain: 租户域名 (example.auth0.com) 或完整 URL
            token: Management API access token
            timeout: 默认请求超时时间
            user_agent: 自定义 User-Agent
            http_client: 自带的 httpx.Client (调用方负责关闭)
            transport: httpx transport，测试时可传 httpx.MockTransport
        """
        if not domain:
            raise ValueError("domain 不能为空")
        if "://" not in domain:
            domain = f"https://{domain}"
        self.base_url = domain.rstrip("/") + self.API_PATH
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
        }

        self._owns_client = http_client is None
        self.client = http_client or Client(timeout=timeout, transport=transport)

        self.guardian = GuardianManager(self)
        self.prompt = PromptManager(self)
        self.self_service_profile = SelfServiceProfileManager(self)
        self.tenant = TenantManager(self)

    @classmethod
    def from_config(cls, config: "ClientConfig", **kwargs) -> "ManagementClient":
        """从配置文件创建客户端"""
        return cls(
            config.domain,
            config.token,
            timeout=config.timeout,
            user_agent=config.user_agent,
            **kwargs,
        )

    def close(self):
        """关闭连接 (只关闭自己创建的 httpx.Client)"""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self) -> str:
        return f"ManagementClient(base_url={self.base_url!r})"

    # ============ URI ============

    def uri(self, *segments: str) -> str:
        """
        拼接相对路径，每一段单独转义 ("/" 也会被转义)

        >>> client.uri("self-service-profiles", "ssp/1", "sso-ticket")
        'self-service-profiles/ssp%2F1/sso-ticket'
        """
        return "/".join(quote(str(s), safe="") for s in segments)

    # ============ 底层请求方法 ============

    def request(
        self,
        method: str,
        uri: str,
        body: Any = None,
        target: Target = None,
        options: Iterable[RequestOption] = (),
    ) -> Any:
        """
        发起一次请求

        Args:
            method: HTTP 方法
            uri: uri() 生成的相对路径
            body: 请求体；Entity 使用 to_payload() (受限子集)，
                  其余 (dict / list) 原样序列化
            target: 响应解析目标，见 Target
            options: 请求选项

        Returns:
            解析结果；响应体为空时返回 None (Entity 实例 target 原样返回)

        Raises:
            APIError: 非 2xx 响应
            TransportError: 请求未完成
            RequestTimeoutError: 超时
            DecodeError: 响应体无法解析
        """
        method = method.upper()
        resolved = resolve_options(options)
        url = self.base_url + uri
        headers = {**self._headers, **resolved.headers}

        kwargs: dict[str, Any] = {}
        if method == "GET" and resolved.params:
            kwargs["params"] = resolved.query_pairs()
        if body is not None:
            kwargs["json"] = body.to_payload() if isinstance(body, Entity) else body
        if resolved.timeout is not None:
            kwargs["timeout"] = resolved.timeout

        logger.debug("%s %s", method, url)
        try:
            resp = self.client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out: %s", method, url, e)
            raise RequestTimeoutError(f"{method} {uri} 超时: {e}") from e
        except httpx.TransportError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {uri} 请求失败: {e}") from e

        logger.debug("%s %s -> %d", method, url, resp.status_code)
        data = self._handle_response(resp)
        return self._decode(resp, data, target)

    def _handle_response(self, resp: Response) -> Any:
        """
        处理响应，统一错误处理

        Returns:
            响应 JSON 或 None (204 / 空响应体)

        Raises:
            APIError: 请求失败
            DecodeError: 2xx 响应体不是 JSON
        """
        if resp.is_success:
            if resp.status_code == 204 or not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as e:
                raise DecodeError(f"响应不是有效的 JSON: {e}", resp.content) from e

        # 解析错误
        try:
            error_data = resp.json()
        except ValueError:
            error_data = None
        if isinstance(error_data, dict):
            error = ManagementError.from_dict(error_data, resp.status_code)
        else:
            error = ManagementError(
                status_code=resp.status_code,
                error=resp.reason_phrase,
                message=resp.text,
            )

        logger.warning("%s %s -> %s", resp.request.method, resp.request.url, error)
        raise APIError(error)

    def _decode(self, resp: Response, data: Any, target: Target) -> Any:
        if data is None:
            return target if isinstance(target, Entity) else None
        if target is None:
            return data
        try:
            if isinstance(target, Entity):
                return target.merge(data)
            if isinstance(target, type) and issubclass(target, Entity):
                return target.from_dict(data)
            return target(data)
        except ModelValidationError as e:
            raise DecodeError(f"响应结构不符: {e}", resp.content) from e
