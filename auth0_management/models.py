"""
Auth0 Management API 数据模型

字段名与线上 JSON 完全一致 (snake_case)，Python 关键字用 metadata 映射：
    from_ <-> "from"

字段规则：
- 可选字段默认 UNSET，序列化时跳过；显式 False / 0 / "" 照常发送
- _required 中的字段总是输出，缺失时输出 null
- _writable 非空时，写操作 (to_payload) 只提交这些字段，
  id / created_at / updated_at 之类服务端字段即使有值也不会发送
- 反序列化总是完整结构，忽略未知字段
"""

import functools
import types
import typing
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta
from typing import Any, ClassVar, Generic, Self, TypeVar

from .optional import UNSET, Unset


class ModelValidationError(ValueError):
    """响应数据结构与模型不匹配"""
    pass


# ============ 字段类型解析 ============

_ZERO_VALUES: dict[type, Any] = {
    str: "",
    bool: False,
    int: 0,
    float: 0.0,
}


def _strip_optional(hint: Any) -> Any:
    """去掉 Unset / None，返回真正的字段类型"""
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a not in (Unset, type(None))]
        if len(args) == 1:
            return args[0]
        return typing.Union[tuple(args)]
    return hint


@functools.cache
def _field_types(cls: type) -> dict[str, Any]:
    hints = typing.get_type_hints(cls)
    return {f.name: _strip_optional(hints[f.name]) for f in fields(cls)}


def _wire_name(f) -> str:
    return f.metadata.get("json", f.name)


def _is_entity_type(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, Entity)


def _format_time(value: datetime) -> str:
    if value.tzinfo is not None and value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"
    return value.isoformat()


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ModelValidationError(f"时间字段需要字符串，实际为 {type(value).__name__}")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise ModelValidationError(f"无法解析时间: {value!r}") from e


def _dump(value: Any) -> Any:
    """序列化单个值 (嵌套实体使用完整结构)"""
    if isinstance(value, Entity):
        return value.to_dict()
    if isinstance(value, datetime):
        return _format_time(value)
    if isinstance(value, list):
        return [_dump(v) for v in value]
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    return value


def _check_scalar(tp: type, value: Any, name: str) -> None:
    """bool 不能当作 int；int 可以当作 float"""
    if tp is float:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif tp is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, tp)
    if not ok:
        raise ModelValidationError(f"{name} 需要 {tp.__name__}，实际为 {type(value).__name__}")


def _load(tp: Any, value: Any, name: str) -> Any:
    """按字段类型反序列化单个值"""
    if value is None:
        return None
    if _is_entity_type(tp):
        return tp.from_dict(value)
    if tp is datetime:
        return _parse_time(value)
    origin = typing.get_origin(tp)
    if origin is list:
        if not isinstance(value, list):
            raise ModelValidationError(f"{name} 需要数组，实际为 {type(value).__name__}")
        (item_type,) = typing.get_args(tp) or (Any,)
        return [_load(item_type, v, name) for v in value]
    if origin is dict or tp is dict:
        if not isinstance(value, dict):
            raise ModelValidationError(f"{name} 需要对象，实际为 {type(value).__name__}")
        return value
    if tp in _ZERO_VALUES:
        _check_scalar(tp, value, name)
    return value


# ============ 实体基类 ============

@dataclass
class Entity:
    """
    所有资源实体的基类

    子类只需声明字段；序列化/反序列化按字段类型自动完成。
    """

    # 总是输出的字段 (缺失时为 null)
    _required: ClassVar[tuple[str, ...]] = ()
    # 写操作允许提交的字段，空表示全部
    _writable: ClassVar[tuple[str, ...]] = ()

    def to_dict(self) -> dict:
        """完整结构，只包含存在的字段"""
        d: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is UNSET:
                if f.name not in self._required:
                    continue
                value = None
            d[_wire_name(f)] = _dump(value)
        return d

    def to_payload(self) -> dict:
        """写操作使用的请求体 (受限子集)"""
        d = self.to_dict()
        if not self._writable:
            return d
        allowed = {_wire_name(f) for f in fields(self) if f.name in self._writable}
        return {k: v for k, v in d.items() if k in allowed}

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """从 API 响应解析"""
        obj = cls()
        obj.merge(data)
        return obj

    def merge(self, data: dict) -> Self:
        """
        用响应数据填充当前对象 (用于 create 之后回填服务端字段)

        Raises:
            ModelValidationError: data 不是对象或字段类型不符
        """
        if not isinstance(data, dict):
            raise ModelValidationError(
                f"{type(self).__name__} 需要 JSON 对象，实际为 {type(data).__name__}"
            )
        types_ = _field_types(type(self))
        for f in fields(self):
            key = _wire_name(f)
            if key not in data:
                continue
            # null 视为缺失 (_required 字段保留 None)
            if data[key] is None and f.name not in self._required:
                setattr(self, f.name, UNSET)
            else:
                setattr(self, f.name, _load(types_[f.name], data[key], key))
        return self

    def get(self, name: str) -> Any:
        """
        取字段值，缺失时返回该类型的零值

        str -> "", bool -> False, int -> 0, float -> 0.0, list -> [], dict -> {}，
        其余类型 (嵌套实体、时间) -> None
        """
        value = getattr(self, name)
        if value is not UNSET:
            return value
        tp = _field_types(type(self))[name]
        origin = typing.get_origin(tp) or tp
        if origin is list:
            return []
        if origin is dict:
            return {}
        return _ZERO_VALUES.get(tp)

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET


E = TypeVar("E", bound=Entity)


# ============ 列表响应 ============

@dataclass
class ListMetadata:
    """
    分页信息

    include_totals=true 时服务端返回 start/limit/length/total，
    checkpoint 分页时返回 next。
    """
    start: int = 0
    limit: int = 0
    length: int = 0
    total: int = 0
    next: str = ""

    def has_next(self) -> bool:
        if self.next:
            return True
        return self.total > self.start + self.length

    @classmethod
    def from_dict(cls, data: dict) -> "ListMetadata":
        return cls(
            start=data.get("start") or 0,
            limit=data.get("limit") or 0,
            length=data.get("length") or 0,
            total=data.get("total") or 0,
            next=data.get("next") or "",
        )


@dataclass
class EntityList(Generic[E]):
    """实体列表 + 分页信息，保持服务端返回顺序"""
    items: list[E] = field(default_factory=list)
    meta: ListMetadata = field(default_factory=ListMetadata)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> E:
        return self.items[index]

    def has_next(self) -> bool:
        return self.meta.has_next()

    @classmethod
    def from_response(cls, data: Any, item_type: type[E], key: str) -> "EntityList[E]":
        """
        解析列表响应

        支持两种格式：
        - {"<key>": [...], "start": 0, "limit": 50, "total": 2}
        - [...] (未开启 include_totals)
        """
        if isinstance(data, list):
            items = [item_type.from_dict(d) for d in data]
            return cls(items=items, meta=ListMetadata(length=len(items), total=len(items)))
        if not isinstance(data, dict):
            raise ModelValidationError(f"列表响应格式错误: {type(data).__name__}")
        raw = data.get(key) or []
        if not isinstance(raw, list):
            raise ModelValidationError(f"{key} 需要数组，实际为 {type(raw).__name__}")
        items = [item_type.from_dict(d) for d in raw]
        meta = ListMetadata.from_dict(data)
        if not meta.length:
            meta.length = len(items)
        return cls(items=items, meta=meta)


# ============ 错误响应 ============

@dataclass
class ManagementError:
    """
    API 错误响应

    Auth0 返回格式:
        {"statusCode": 404, "error": "Not Found",
         "message": "...", "errorCode": "inexistent_user"}
    """
    status_code: int
    error: str = ""
    message: str = ""
    error_code: str = ""

    @classmethod
    def from_dict(cls, data: dict, status_code: int = 0) -> "ManagementError":
        return cls(
            status_code=data.get("statusCode") or status_code,
            error=data.get("error") or "",
            message=data.get("message") or data.get("error_description") or "",
            error_code=data.get("errorCode") or "",
        )

    def __str__(self) -> str:
        msg = f"{self.status_code} {self.error}: {self.message}"
        if self.error_code:
            msg += f" ({self.error_code})"
        return msg


# ============ Guardian (多因素认证) ============

@dataclass
class MultiFactor(Entity):
    """MFA 因子状态 (GET guardian/factors)"""
    name: str | Unset = UNSET
    enabled: bool | Unset = UNSET
    trial_expired: bool | Unset = UNSET


# "all-applications" 或 "confidence-score"，空列表表示关闭
MultiFactorPolicies = list[str]


@dataclass
class MultiFactorProvider(Entity):
    """
    当前选中的短信/推送服务商

    phone: auth0 / twilio / phone-message-hook
    push:  guardian / sns / direct
    """
    provider: str | Unset = UNSET


@dataclass
class PhoneMessageTypes(Entity):
    """电话因子的消息类型: sms / voice"""
    message_types: list[str] | Unset = UNSET


@dataclass
class MultiFactorSMSTemplate(Entity):
    """短信模板，支持 {{code}} 等占位符"""
    enrollment_message: str | Unset = UNSET
    verification_message: str | Unset = UNSET


@dataclass
class MultiFactorPhoneTemplate(Entity):
    """电话因子模板"""
    enrollment_message: str | Unset = UNSET
    verification_message: str | Unset = UNSET


@dataclass
class MultiFactorProviderTwilio(Entity):
    """Twilio 配置 (from 与 messaging_service_sid 二选一)"""
    from_: str | Unset = field(default=UNSET, metadata={"json": "from"})
    messaging_service_sid: str | Unset = UNSET
    auth_token: str | Unset = UNSET
    sid: str | Unset = UNSET


@dataclass
class MultiFactorProviderAmazonSNS(Entity):
    """推送通知的 Amazon SNS 配置"""
    aws_access_key_id: str | Unset = UNSET
    aws_secret_access_key: str | Unset = UNSET
    aws_region: str | Unset = UNSET
    sns_apns_platform_application_arn: str | Unset = UNSET
    sns_gcm_platform_application_arn: str | Unset = UNSET


@dataclass
class MultiFactorProviderAPNS(Entity):
    """推送通知的 APNs 配置 (p12 只写)"""
    sandbox: bool | Unset = UNSET
    bundle_id: str | Unset = UNSET
    p12: str | Unset = UNSET
    enabled: bool | Unset = UNSET

    _writable: ClassVar[tuple[str, ...]] = ("sandbox", "bundle_id", "p12")


@dataclass
class MultiFactorProviderFCM(Entity):
    """推送通知的 FCM 配置"""
    server_key: str | Unset = UNSET


@dataclass
class MultiFactorDUOSettings(Entity):
    ikey: str | Unset = UNSET
    skey: str | Unset = UNSET
    host: str | Unset = UNSET


@dataclass
class MultiFactorWebAuthnSettings(Entity):
    """
    WebAuthn 设置

    user_verification: discouraged / preferred / required (仅 roaming)
    """
    override_relying_party: bool | Unset = UNSET
    relying_party_identifier: str | Unset = UNSET
    user_verification: str | Unset = UNSET


@dataclass
class CreateEnrollmentTicket(Entity):
    """
    创建 MFA 注册 ticket 的请求

    user_id 与 send_mail 总是发送
    """
    user_id: str | Unset = UNSET
    email: str | Unset = UNSET
    send_mail: bool = False
    email_locale: str | Unset = UNSET
    factor: str | Unset = UNSET
    allow_multiple_enrollments: bool | Unset = UNSET

    _required: ClassVar[tuple[str, ...]] = ("user_id", "send_mail")


@dataclass
class EnrollmentTicket(Entity):
    """注册 ticket (只读结果)"""
    ticket_id: str | Unset = UNSET
    ticket_url: str | Unset = UNSET


@dataclass
class Enrollment(Entity):
    """MFA 注册记录"""
    id: str | Unset = UNSET
    status: str | Unset = UNSET
    name: str | Unset = UNSET
    identifier: str | Unset = UNSET
    phone_number: str | Unset = UNSET
    enrolled_at: datetime | Unset = UNSET
    last_auth: datetime | Unset = UNSET


# ============ Prompt (登录界面) ============

@dataclass
class Prompt(Entity):
    """
    Universal Login 设置

    universal_login_experience: new / classic
    """
    universal_login_experience: str | Unset = UNSET
    identifier_first: bool | Unset = UNSET
    webauthn_platform_first_factor: bool | Unset = UNSET


# ============ Self-Service Profile (自助 SSO) ============

@dataclass
class SelfServiceProfileUserAttribute(Entity):
    """SSO 流程中展示给用户的属性映射 (三个字段总是发送)"""
    name: str | Unset = UNSET
    description: str | Unset = UNSET
    is_optional: bool | Unset = UNSET

    _required: ClassVar[tuple[str, ...]] = ("name", "description", "is_optional")


@dataclass
class BrandingColors(Entity):
    primary: str | Unset = UNSET


@dataclass
class SelfServiceProfileBranding(Entity):
    logo_url: str | Unset = UNSET
    colors: BrandingColors | Unset = UNSET


@dataclass
class SelfServiceProfile(Entity):
    """
    自助 SSO 配置

    allowed_strategies 可选值:
        oidc, samlp, waad, google-apps, adfs, okta, keycloak-samlp, pingfederate

    写操作只提交 name / description / allowed_strategies / user_attributes / branding
    """
    id: str | Unset = UNSET
    name: str | Unset = UNSET
    description: str | Unset = UNSET
    allowed_strategies: list[str] | Unset = UNSET
    user_attributes: list[SelfServiceProfileUserAttribute] | Unset = UNSET
    created_at: datetime | Unset = UNSET
    updated_at: datetime | Unset = UNSET
    branding: SelfServiceProfileBranding | Unset = UNSET

    _writable: ClassVar[tuple[str, ...]] = (
        "name",
        "description",
        "allowed_strategies",
        "user_attributes",
        "branding",
    )


@dataclass
class SelfServiceProfileTicketConnectionConfigOptions(Entity):
    icon_url: str | Unset = UNSET
    domain_aliases: list[str] | Unset = UNSET


@dataclass
class SelfServiceProfileTicketConnectionConfig(Entity):
    """SSO 流程中新建 connection 的配置"""
    name: str | Unset = UNSET
    display_name: str | Unset = UNSET
    is_domain_connection: bool | Unset = UNSET
    show_as_button: bool | Unset = UNSET
    metadata: dict[str, Any] | Unset = UNSET
    options: SelfServiceProfileTicketConnectionConfigOptions | Unset = UNSET


@dataclass
class SelfServiceProfileTicketEnabledOrganization(Entity):
    organization_id: str | Unset = UNSET
    assign_membership_on_login: bool | Unset = UNSET
    show_as_button: bool | Unset = UNSET


@dataclass
class SelfServiceProfileTicket(Entity):
    """
    SSO 访问 ticket

    connection_id: 编辑已有 connection
    connection_config: 新建 connection
    ticket: 服务端生成，create_ticket 后回填
    """
    connection_id: str | Unset = UNSET
    connection_config: SelfServiceProfileTicketConnectionConfig | Unset = UNSET
    enabled_clients: list[str] | Unset = UNSET
    enabled_organizations: list[SelfServiceProfileTicketEnabledOrganization] | Unset = UNSET
    ttl_sec: int | Unset = UNSET
    ticket: str | Unset = UNSET


# ============ Tenant ============

@dataclass
class TenantSessionCookie(Entity):
    """mode: persistent / non-persistent"""
    mode: str | Unset = UNSET


@dataclass
class TenantFlags(Entity):
    enable_client_connections: bool | Unset = UNSET
    enable_apis_section: bool | Unset = UNSET
    enable_pipeline2: bool | Unset = UNSET
    enable_dynamic_client_registration: bool | Unset = UNSET
    enable_custom_domain_in_emails: bool | Unset = UNSET
    enable_legacy_profile: bool | Unset = UNSET
    enable_public_signup_user_exists_error: bool | Unset = UNSET
    allow_legacy_tokeninfo_endpoint: bool | Unset = UNSET
    disable_clickjack_protection_headers: bool | Unset = UNSET
    no_disclose_enterprise_connections: bool | Unset = UNSET
    revoke_refresh_token_grant: bool | Unset = UNSET
    mfa_show_factor_list_on_enrollment: bool | Unset = UNSET


@dataclass
class Tenant(Entity):
    """
    租户设置

    session_lifetime / idle_session_lifetime 单位为小时；
    小于 1 小时时以分钟提交 (*_in_minutes)，服务端不接受小数小时
    """
    friendly_name: str | Unset = UNSET
    picture_url: str | Unset = UNSET
    support_email: str | Unset = UNSET
    support_url: str | Unset = UNSET
    allowed_logout_urls: list[str] | Unset = UNSET
    session_lifetime: float | Unset = UNSET
    idle_session_lifetime: float | Unset = UNSET
    default_audience: str | Unset = UNSET
    default_directory: str | Unset = UNSET
    default_redirection_uri: str | Unset = UNSET
    enabled_locales: list[str] | Unset = UNSET
    sandbox_version: str | Unset = UNSET
    flags: TenantFlags | Unset = UNSET
    session_cookie: TenantSessionCookie | Unset = UNSET

    def to_payload(self) -> dict:
        d = super().to_payload()
        for key in ("session_lifetime", "idle_session_lifetime"):
            value = d.get(key)
            if isinstance(value, (int, float)) and value < 1:
                del d[key]
                d[f"{key}_in_minutes"] = round(value * 60)
        return d
