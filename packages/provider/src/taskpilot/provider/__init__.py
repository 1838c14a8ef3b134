"""TaskPilot Provider -- 托管模型调用抽象层

packages/provider 的公开接口导出。
"""

from .client import LiteLLMClient
from .config import DEFAULT_MODEL, ProviderConfig, load_provider_config
from .echo_adapter import EchoMessageAdapter
from .exceptions import MalformedResponseError, ProviderError, ProviderUnreachableError
from .models import ModelCallResult, TokenUsage

__all__ = [
    "ModelCallResult",
    "TokenUsage",
    "LiteLLMClient",
    "EchoMessageAdapter",
    "ProviderConfig",
    "DEFAULT_MODEL",
    "load_provider_config",
    "ProviderError",
    "ProviderUnreachableError",
    "MalformedResponseError",
]
