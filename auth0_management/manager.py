"""
通用资源 manager

每个资源由一条 ResourceConfig 描述 (URI 前缀 + 实体类型 + 列表键)，
ResourceManager 根据配置提供 list / read / create / update / delete。
资源特有的操作在子类中补充。
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic

from .models import E, EntityList
from .options import RequestOption, apply_list_defaults

if TYPE_CHECKING:
    from .client import ManagementClient


@dataclass(frozen=True)
class ResourceConfig(Generic[E]):
    """
    资源配置

    Attributes:
        path: 集合路径段，例如 ("self-service-profiles",)
        entity: 实体类型
        list_key: 分页响应中实体数组的键
        update_method: 部分更新用 PATCH，整体替换用 PUT
        read_back: create / update 后把响应回填到调用方传入的实体
    """
    path: tuple[str, ...]
    entity: type[E]
    list_key: str
    update_method: str = "PATCH"
    read_back: bool = True


class ResourceManager(Generic[E]):
    """标准 CRUD 操作，每个方法只发一个请求"""

    def __init__(self, client: "ManagementClient", config: ResourceConfig[E]):
        self.client = client
        self.config = config

    def _uri(self, *segments: str) -> str:
        return self.client.uri(*self.config.path, *segments)

    def list(self, *opts: RequestOption) -> EntityList[E]:
        """
        列出资源 (单页)

        默认 per_page=50, include_totals=true，可用 Option 覆盖
        """
        config = self.config
        return self.client.request(
            "GET",
            self._uri(),
            target=lambda data: EntityList.from_response(data, config.entity, config.list_key),
            options=apply_list_defaults(opts),
        )

    def read(self, resource_id: str, *opts: RequestOption) -> E:
        """
        获取单个资源

        Raises:
            APIError: 不存在时 status_code == 404
        """
        return self.client.request(
            "GET", self._uri(resource_id), target=self.config.entity, options=opts
        )

    def create(self, entity: E, *opts: RequestOption) -> E:
        """
        创建资源

        read_back 为 True 时，服务端生成的字段 (id、时间戳) 回填到 entity 并返回它；
        否则返回新的实体。
        """
        target = entity if self.config.read_back else self.config.entity
        return self.client.request("POST", self._uri(), body=entity, target=target, options=opts)

    def update(self, resource_id: str, entity: E, *opts: RequestOption) -> Any:
        """
        更新资源

        只提交 entity 中存在的字段，缺失字段服务端保持不变。
        read_back 为 True 时响应回填到 entity 并返回它，否则返回原始响应。
        """
        target = entity if self.config.read_back else None
        return self.client.request(
            self.config.update_method,
            self._uri(resource_id),
            body=entity,
            target=target,
            options=opts,
        )

    def delete(self, resource_id: str, *opts: RequestOption) -> None:
        """删除资源 (重复删除时服务端可能返回 404)"""
        self.client.request("DELETE", self._uri(resource_id), options=opts)


class SettingsManager(Generic[E]):
    """
    单例资源 (没有 ID)，例如 prompts、tenants/settings

    read 返回新实体；update 把响应回填到传入的实体
    """

    def __init__(
        self,
        client: "ManagementClient",
        path: tuple[str, ...],
        entity: type[E],
        update_method: str = "PATCH",
    ):
        self.client = client
        self.path = path
        self.entity = entity
        self.update_method = update_method

    def _uri(self, *segments: str) -> str:
        return self.client.uri(*self.path, *segments)

    def read(self, *opts: RequestOption) -> E:
        return self.client.request("GET", self._uri(), target=self.entity, options=opts)

    def update(self, entity: E, *opts: RequestOption) -> E:
        """只提交 entity 中存在的字段"""
        return self.client.request(
            self.update_method, self._uri(), body=entity, target=entity, options=opts
        )
