"""
Prompt (Universal Login 界面)

路径:
- prompts
- prompts/{prompt}/custom-text/{language}
- prompts/{prompt}/partials
"""

from typing import TYPE_CHECKING, Any

from .manager import SettingsManager
from .models import Prompt
from .options import RequestOption

if TYPE_CHECKING:
    from .client import ManagementClient


class PromptManager(SettingsManager[Prompt]):
    """
    登录界面设置

    read / update (PATCH) 继承自 SettingsManager
    """

    def __init__(self, client: "ManagementClient"):
        super().__init__(client, ("prompts",), Prompt)

    def custom_text(self, prompt: str, language: str, *opts: RequestOption) -> dict[str, Any]:
        """
        获取自定义文案

        Args:
            prompt: prompt 名称，例如 "login"
            language: 语言，例如 "en"
        """
        return self.client.request(
            "GET", self._uri(prompt, "custom-text", language), options=opts
        ) or {}

    def set_custom_text(
        self, prompt: str, language: str, body: dict[str, Any], *opts: RequestOption
    ) -> None:
        """整体替换自定义文案 (PUT)，传 {} 清空"""
        self.client.request(
            "PUT", self._uri(prompt, "custom-text", language), body=body, options=opts
        )

    def read_partials(self, prompt: str, *opts: RequestOption) -> dict[str, Any]:
        """获取模板片段 (需要自定义域名)"""
        return self.client.request("GET", self._uri(prompt, "partials"), options=opts) or {}

    def set_partials(self, prompt: str, body: dict[str, Any], *opts: RequestOption) -> None:
        """整体替换模板片段 (PUT)"""
        self.client.request("PUT", self._uri(prompt, "partials"), body=body, options=opts)
