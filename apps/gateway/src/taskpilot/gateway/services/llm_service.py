"""LLMService -- 绑定模型标识的模型调用入口

意图解析和回复生成共用同一个 LLMService；
底层客户端为 LiteLLMClient（litellm 模式）或 EchoMessageAdapter（echo 模式）。
"""

from typing import Protocol

from taskpilot.provider import DEFAULT_MODEL, EchoMessageAdapter, ModelCallResult


class CompletionClient(Protocol):
    """LiteLLMClient / EchoMessageAdapter 的公共接口"""

    async def complete(
        self,
        messages: list[dict[str, str]],
        model: str,
        response_format: dict[str, str] | None = None,
        **kwargs,
    ) -> ModelCallResult: ...

    async def health_check(self) -> bool: ...


class LLMService:
    """LLM 服务

    无参构造时使用 Echo 适配器，便于测试与离线运行。
    """

    def __init__(
        self,
        client: CompletionClient | None = None,
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._client = client or EchoMessageAdapter()
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def call(
        self,
        prompt_or_messages: str | list[dict[str, str]],
        response_format: dict[str, str] | None = None,
    ) -> ModelCallResult:
        """调用模型

        Args:
            prompt_or_messages:
                - str: 纯文本 prompt，自动转为单条 user message
                - list[dict]: messages 格式
            response_format: 响应格式约束，如 {"type": "json_object"}

        Returns:
            ModelCallResult
        """
        if isinstance(prompt_or_messages, str):
            messages = [{"role": "user", "content": prompt_or_messages}]
        else:
            messages = prompt_or_messages

        return await self._client.complete(
            messages=messages,
            model=self._model,
            response_format=response_format,
        )

    async def health_check(self) -> bool:
        """探测底层模型服务是否可达"""
        return await self._client.health_check()
