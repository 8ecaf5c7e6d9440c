"""
客户端配置

默认从 management-config.json 读取：
    {
        "domain": "example.auth0.com",
        "token": "<management api token>",
        "timeout": 30
    }
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

DEFAULT_CONFIG_PATH = "management-config.json"


class ConfigError(ValueError):
    """配置文件不存在或内容无效"""
    pass


class ClientConfig(BaseModel):
    domain: str = Field(min_length=1)
    token: str = Field(min_length=1, repr=False)
    timeout: float = Field(default=30.0, gt=0)
    user_agent: str | None = None

    @field_validator("domain")
    @classmethod
    def _strip_domain(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("domain 不能为空")
        return v


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> ClientConfig:
    """
    读取并校验配置文件

    Raises:
        ConfigError: 文件不存在、不是 JSON 或字段校验失败
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"{path} 不存在")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} 不是有效的 JSON: {e}") from e
    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{path} 配置错误: {e}") from e
