"""LiteLLMClient -- 托管模型调用封装

通过 litellm.acompletion() 调用托管模型（默认 OpenAI），
统一返回 ModelCallResult。不做重试，失败直接以 ProviderError 抛出。
"""

import contextlib
import time
from typing import Any

import httpx
import structlog
from litellm import acompletion

from .exceptions import ProviderError, ProviderUnreachableError
from .models import ModelCallResult, TokenUsage

log = structlog.get_logger()

# 健康检查超时（硬编码，应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

# 未配置 api_base 时健康检查探测的地址
DEFAULT_API_BASE = "https://api.openai.com/v1"

# 连接类异常类型集合（包装为 ProviderUnreachableError）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.TimeoutException,
)


def _is_connection_error(e: Exception) -> bool:
    """判断异常是否为连接类错误（服务不可达）"""
    if isinstance(e, _CONNECTION_ERROR_TYPES):
        return True
    # LiteLLM 的 APIConnectionError / Timeout 也属于连接类错误
    error_name = type(e).__name__
    return error_name in ("APIConnectionError", "APITimeoutError", "Timeout")


def _parse_usage(response: Any) -> TokenUsage:
    """从 LiteLLM 响应解析 token 使用数据（失败时返回全零）"""
    usage = getattr(response, "usage", None)
    if usage is None:
        return TokenUsage()
    try:
        return TokenUsage(
            prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
    except (TypeError, ValueError) as e:
        log.debug("parse_usage_failed", error=str(e))
        return TokenUsage()


def _extract_provider(response: Any) -> str:
    provider = ""
    with contextlib.suppress(Exception):
        hidden = getattr(response, "_hidden_params", None)
        if hidden and isinstance(hidden, dict):
            provider = hidden.get("custom_llm_provider", "") or ""
    return provider


class LiteLLMClient:
    """托管模型客户端

    封装 litellm.acompletion() 调用。
    """

    def __init__(
        self,
        api_base: str | None = None,
        api_key: str = "",
        timeout_s: int | None = None,
    ) -> None:
        """初始化客户端

        Args:
            api_base: 模型服务地址，None 时由 LiteLLM 按模型名路由
            api_key: 模型服务访问密钥
            timeout_s: 请求超时（秒），None 表示不设超时
        """
        self._api_base = api_base.rstrip("/") if api_base else None
        self._api_key = api_key
        self._timeout_s = timeout_s

    @property
    def endpoint(self) -> str:
        return self._api_base or DEFAULT_API_BASE

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: str,
        response_format: dict[str, str] | None = None,
        **kwargs,
    ) -> ModelCallResult:
        """发送 chat completion 请求

        Args:
            messages: 消息列表，格式 [{"role": "user", "content": "..."}]
            model: 模型标识（如 gpt-5）
            response_format: 响应格式约束，如 {"type": "json_object"}
            **kwargs: 其他 LiteLLM 支持的参数

        Returns:
            ModelCallResult

        Raises:
            ProviderUnreachableError: 服务连接失败或超时
            ProviderError: 服务返回错误（如模型不可用、配额耗尽）
        """
        start_time = time.monotonic()

        try:
            call_kwargs: dict[str, Any] = {
                "model": model,
                "messages": messages,
                **kwargs,
            }
            if self._api_base:
                call_kwargs["api_base"] = self._api_base
            if self._api_key:
                call_kwargs["api_key"] = self._api_key
            if self._timeout_s is not None:
                call_kwargs["timeout"] = self._timeout_s
            if response_format is not None:
                call_kwargs["response_format"] = response_format

            log.debug(
                "litellm_call_start",
                model=model,
                message_count=len(messages),
                json_mode=response_format is not None,
            )

            response = await acompletion(**call_kwargs)

            duration_ms = int((time.monotonic() - start_time) * 1000)
            content = response.choices[0].message.content or ""
            model_name = getattr(response, "model", "") or model

            result = ModelCallResult(
                content=content,
                model_name=model_name,
                provider=_extract_provider(response),
                duration_ms=duration_ms,
                token_usage=_parse_usage(response),
            )

            log.info(
                "litellm_call_completed",
                model=model_name,
                provider=result.provider,
                duration_ms=duration_ms,
                total_tokens=result.token_usage.total_tokens,
            )

            return result

        except ProviderError:
            raise
        except Exception as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            log.error(
                "litellm_call_failed",
                model=model,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=duration_ms,
            )
            if _is_connection_error(e):
                raise ProviderUnreachableError(
                    endpoint=self.endpoint,
                    original_error=e,
                ) from e
            raise ProviderError(
                message=f"LLM call failed: {e}",
                recoverable=True,
            ) from e

    async def health_check(self) -> bool:
        """检查模型服务可达性

        发送 GET {endpoint}/models 请求。

        注意: 此方法不抛出异常，所有异常内部捕获并返回 False。
        """
        url = f"{self.endpoint}/models"
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        try:
            async with httpx.AsyncClient() as http_client:
                resp = await http_client.get(
                    url, headers=headers, timeout=HEALTH_CHECK_TIMEOUT_S
                )
                return resp.status_code == 200
        except Exception as e:
            log.debug("health_check_failed", url=url, error=str(e))
            return False
