"""集成测试共享 fixture

全链路：HTTP -> ChatService -> IntentParser / ResponseGenerator -> LLMService
-> LiteLLMClient -> Mock litellm.acompletion()。
意图解析调用（json_object 格式）返回 ScriptedModel.intents 中的下一条 JSON，
回复生成调用返回固定文本。
"""

import json
from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskpilot.core.store import create_store_group
from taskpilot.gateway.services.intent_parser import IntentParser
from taskpilot.gateway.services.llm_service import LLMService
from taskpilot.gateway.services.response_generator import ResponseGenerator
from taskpilot.provider import LiteLLMClient

REPLY_TEXT = "All set. The eRupi pilot tracker has been updated."


def _make_mock_response(content: str, model: str = "gpt-5"):
    """构造模拟的 litellm acompletion 响应"""
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = content
    resp.usage = MagicMock()
    resp.usage.prompt_tokens = 10
    resp.usage.completion_tokens = 5
    resp.usage.total_tokens = 15
    resp.model = model
    resp._hidden_params = {"custom_llm_provider": "openai"}
    return resp


class ScriptedModel:
    """按调用类型返回预设内容的模型替身"""

    def __init__(self) -> None:
        self.intents: list[dict | Exception] = []
        self.reply: str | Exception = REPLY_TEXT
        self.calls: list[dict] = []

    async def acompletion(self, **kwargs):
        self.calls.append(kwargs)
        if kwargs.get("response_format") == {"type": "json_object"}:
            intent = self.intents.pop(0) if self.intents else {"action": "list_tasks"}
            if isinstance(intent, Exception):
                raise intent
            return _make_mock_response(json.dumps(intent))
        if isinstance(self.reply, Exception):
            raise self.reply
        return _make_mock_response(self.reply)


@pytest.fixture
def scripted_model() -> ScriptedModel:
    return ScriptedModel()


@pytest_asyncio.fixture
async def integration_app(monkeypatch, tmp_path: Path, scripted_model: ScriptedModel):
    """集成测试用 FastAPI app（真实 LiteLLMClient + Mock acompletion）"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from taskpilot.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    app.state.store_group = store_group

    with patch(
        "taskpilot.provider.client.acompletion",
        new_callable=AsyncMock,
        side_effect=scripted_model.acompletion,
    ):
        llm_service = LLMService(
            LiteLLMClient(api_key="sk-test"),
            model="gpt-5",
        )
        app.state.llm_service = llm_service
        app.state.intent_classifier = IntentParser(llm_service)
        app.state.reply_narrator = ResponseGenerator(llm_service)

        yield app

    await store_group.conn.close()


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
