"""
Tenant 设置

路径: tenants/settings
"""

from typing import TYPE_CHECKING

from .manager import SettingsManager
from .models import Tenant

if TYPE_CHECKING:
    from .client import ManagementClient


class TenantManager(SettingsManager[Tenant]):
    """
    租户设置

    update 使用 PATCH；小于 1 小时的会话时长以分钟提交 (见 Tenant.to_payload)
    """

    def __init__(self, client: "ManagementClient"):
        super().__init__(client, ("tenants", "settings"), Tenant)
