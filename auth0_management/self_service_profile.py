"""
Self-Service Profile (自助 SSO)

客户可以通过自助 SSO 流程自行配置企业连接 (OIDC / SAML / Azure AD ...)。

路径:
- self-service-profiles
- self-service-profiles/{id}/custom-text/{language}/{page}
- self-service-profiles/{id}/sso-ticket
- self-service-profiles/{id}/sso-ticket/{ticket_id}/revoke
"""

from typing import TYPE_CHECKING, Any

from .manager import ResourceConfig, ResourceManager
from .models import SelfServiceProfile, SelfServiceProfileTicket
from .options import RequestOption

if TYPE_CHECKING:
    from .client import ManagementClient


SELF_SERVICE_PROFILES = ResourceConfig(
    path=("self-service-profiles",),
    entity=SelfServiceProfile,
    list_key="self_service_profiles",
)


class SelfServiceProfileManager(ResourceManager[SelfServiceProfile]):
    """
    自助 SSO 配置管理

    create / update 只提交 name、description、allowed_strategies、
    user_attributes、branding，服务端字段 (id、时间戳) 不会发送。
    """

    def __init__(self, client: "ManagementClient"):
        super().__init__(client, SELF_SERVICE_PROFILES)

    # ============ 自定义文案 ============

    def get_custom_text(
        self, profile_id: str, language: str, page: str, *opts: RequestOption
    ) -> dict[str, Any]:
        """
        获取 SSO 流程页面的自定义文案

        Args:
            profile_id: profile ID
            language: 语言，例如 "en"
            page: 页面，例如 "get-started"
        """
        return self.client.request(
            "GET", self._uri(profile_id, "custom-text", language, page), options=opts
        ) or {}

    def set_custom_text(
        self,
        profile_id: str,
        language: str,
        page: str,
        payload: dict[str, Any],
        *opts: RequestOption,
    ) -> None:
        """整体替换自定义文案 (PUT)，传 {} 清空"""
        self.client.request(
            "PUT",
            self._uri(profile_id, "custom-text", language, page),
            body=payload,
            options=opts,
        )

    # ============ SSO ticket ============

    def create_ticket(
        self, profile_id: str, ticket: SelfServiceProfileTicket, *opts: RequestOption
    ) -> SelfServiceProfileTicket:
        """
        创建 SSO 访问 ticket

        响应中的 ticket (URL) 回填到传入的 ticket 对象并返回它
        """
        return self.client.request(
            "POST", self._uri(profile_id, "sso-ticket"), body=ticket, target=ticket, options=opts
        )

    def revoke_ticket(self, profile_id: str, ticket_id: str, *opts: RequestOption) -> None:
        """吊销 SSO 访问 ticket"""
        self.client.request(
            "POST", self._uri(profile_id, "sso-ticket", ticket_id, "revoke"), options=opts
        )
