"""ProviderConfig -- Provider 配置加载

从环境变量加载配置，模型标识不硬编码在调用方。
"""

import os
from typing import Literal

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()

DEFAULT_MODEL = "gpt-5"


class ProviderConfig(BaseModel):
    """Provider 包配置 -- 从环境变量加载

    环境变量:
        TASKPILOT_LLM_MODE: 运行模式（litellm/echo）
        TASKPILOT_LLM_MODEL: 模型标识（默认 gpt-5）
        TASKPILOT_LLM_API_BASE: 可选的服务地址覆盖
        TASKPILOT_LLM_API_KEY: 访问密钥，未设置时回落到 OPENAI_API_KEY
        TASKPILOT_LLM_TIMEOUT_S: 调用超时（秒），未设置表示不设超时
    """

    llm_mode: Literal["litellm", "echo"] = Field(
        default="litellm",
        description="LLM 运行模式：litellm / echo",
    )
    model: str = Field(default=DEFAULT_MODEL, description="模型标识")
    api_base: str | None = Field(default=None, description="模型服务地址覆盖")
    api_key: SecretStr = Field(default=SecretStr(""), description="模型服务访问密钥")
    timeout_s: int | None = Field(
        default=None,
        ge=1,
        description="LLM 调用超时（秒），None 表示不设超时",
    )


def load_provider_config() -> ProviderConfig:
    """从环境变量加载 Provider 配置

    Returns:
        ProviderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKPILOT_LLM_MODE"):
        kwargs["llm_mode"] = val

    if val := os.environ.get("TASKPILOT_LLM_MODEL"):
        kwargs["model"] = val

    if val := os.environ.get("TASKPILOT_LLM_API_BASE"):
        kwargs["api_base"] = val

    if val := os.environ.get("TASKPILOT_LLM_API_KEY") or os.environ.get("OPENAI_API_KEY"):
        kwargs["api_key"] = SecretStr(val)

    if val := os.environ.get("TASKPILOT_LLM_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = int(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="TASKPILOT_LLM_TIMEOUT_S",
                value=val,
                fallback=None,
            )
            # 不设超时，不阻塞启动

    return ProviderConfig(**kwargs)
