"""EchoMessageAdapter -- 离线 Echo 模式

TASKPILOT_LLM_MODE=echo 时替代 LiteLLMClient，不访问外部服务。
回声内容不是 JSON，意图解析会落到 list_tasks 默认操作。
"""

import asyncio
import time

from .models import ModelCallResult, TokenUsage


class EchoMessageAdapter:
    """与 LiteLLMClient 同接口的回声适配器"""

    @property
    def endpoint(self) -> str:
        return "echo"

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: str = "echo",
        response_format: dict[str, str] | None = None,
        **kwargs,
    ) -> ModelCallResult:
        """返回最后一条 user message 的回声

        Args:
            messages: 消息列表
            model: 模型标识（仅回填到结果）
            response_format: 忽略
            **kwargs: 忽略
        """
        start_time = time.monotonic()

        user_content = self._extract_last_user_content(messages)

        # 模拟少量延迟
        await asyncio.sleep(0.01)

        response_text = f"Echo: {user_content}"

        # 按 word 简单估算 token
        prompt_tokens = len(user_content.split())
        completion_tokens = len(response_text.split())

        return ModelCallResult(
            content=response_text,
            model_name=model,
            provider="echo",
            duration_ms=int((time.monotonic() - start_time) * 1000),
            token_usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )

    async def health_check(self) -> bool:
        return True

    @staticmethod
    def _extract_last_user_content(messages: list[dict[str, str]]) -> str:
        """提取最后一条 user message 的 content，无 user 消息时返回 "(empty)" """
        for msg in reversed(messages):
            if msg.get("role") == "user":
                return msg.get("content", "")

        if messages:
            return messages[-1].get("content", "(empty)")
        return "(empty)"
