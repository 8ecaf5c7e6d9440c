"""
请求选项构建器

所有 manager 方法都接受 *opts: RequestOption，按顺序应用：
- 查询参数 (分页、字段过滤、排序) 只附加到 GET 请求
- 后出现的同名参数覆盖先出现的，但保持首次出现的位置
- 零值照常输出 (page=0 与未设置不同)
"""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass(frozen=True)
class RequestOption:
    """单个请求选项 (不可变)"""
    params: tuple[tuple[str, str], ...] = ()
    headers: tuple[tuple[str, str], ...] = ()
    timeout: float | None = None

    def __str__(self) -> str:
        parts = [f"{k}={v}" for k, v in self.params]
        parts += [f"{k}: {v}" for k, v in self.headers]
        if self.timeout is not None:
            parts.append(f"timeout={self.timeout}")
        return ", ".join(parts)


def _format_value(value: str | int | float | bool) -> str:
    """bool 输出 true/false，其余原样转字符串"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _param(key: str, value: str | int | float | bool) -> RequestOption:
    return RequestOption(params=((key, _format_value(value)),))


class Option:
    """
    请求选项构建器

    示例:
        >>> client.self_service_profile.list(Option.page(0), Option.per_page(10))

        >>> Option.include_fields("id", "name")
        fields=id,name, include_fields=true

        >>> Option.query('email:"alice@example.com"')
        q=email:"alice@example.com", search_engine=v3
    """

    @staticmethod
    def page(page: int) -> RequestOption:
        """页码，从 0 开始"""
        return _param("page", page)

    @staticmethod
    def per_page(items: int) -> RequestOption:
        return _param("per_page", items)

    @staticmethod
    def include_totals(include: bool) -> RequestOption:
        """响应中包含 start / limit / total"""
        return _param("include_totals", include)

    @staticmethod
    def include_fields(*fields: str) -> RequestOption:
        """只返回指定字段"""
        return RequestOption(params=(("fields", ",".join(fields)), ("include_fields", "true")))

    @staticmethod
    def exclude_fields(*fields: str) -> RequestOption:
        """排除指定字段"""
        return RequestOption(params=(("fields", ",".join(fields)), ("include_fields", "false")))

    @staticmethod
    def query(q: str) -> RequestOption:
        """Lucene 查询 (search engine v3)"""
        return RequestOption(params=(("q", q), ("search_engine", "v3")))

    @staticmethod
    def sort(sort: str) -> RequestOption:
        """排序，例如 "created_at:-1" """
        return _param("sort", sort)

    @staticmethod
    def from_checkpoint(checkpoint: str) -> RequestOption:
        """checkpoint 分页的起点 (上一页的 next)"""
        return _param("from", checkpoint)

    @staticmethod
    def take(items: int) -> RequestOption:
        """checkpoint 分页的每页数量"""
        return _param("take", items)

    @staticmethod
    def parameter(key: str, value: str | int | float | bool) -> RequestOption:
        """任意查询参数"""
        return _param(key, value)

    @staticmethod
    def header(key: str, value: str) -> RequestOption:
        return RequestOption(headers=((key, value),))

    @staticmethod
    def timeout(seconds: float) -> RequestOption:
        """
        单次请求的超时时间

        超时后请求被中止并抛出 RequestTimeoutError
        """
        if seconds <= 0:
            raise ValueError("timeout 必须大于 0")
        return RequestOption(timeout=seconds)


@dataclass
class ResolvedOptions:
    """合并后的选项"""
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None

    def query_pairs(self) -> list[tuple[str, str]]:
        """有序的查询参数"""
        return list(self.params.items())


def resolve_options(options: Iterable[RequestOption]) -> ResolvedOptions:
    """按顺序合并选项"""
    resolved = ResolvedOptions()
    for opt in options:
        for key, value in opt.params:
            resolved.params[key] = value
        for key, value in opt.headers:
            resolved.headers[key] = value
        if opt.timeout is not None:
            resolved.timeout = opt.timeout
    return resolved


# 列表接口默认值
DEFAULT_PER_PAGE = 50


def apply_list_defaults(options: Iterable[RequestOption]) -> list[RequestOption]:
    """
    列表接口的默认选项: per_page=50, include_totals=true

    调用方的选项放在后面，可以覆盖默认值
    """
    return [
        Option.per_page(DEFAULT_PER_PAGE),
        Option.include_totals(True),
        *options,
    ]
