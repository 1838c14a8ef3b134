"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient + 替身能力实现

app 手动初始化（绕过 lifespan）：Store 使用临时数据库，
意图解析与回复生成使用确定性替身，测试通过 classifier.operation 指定解析结果。
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskpilot.core.models import ListTasksOperation, OperationResult, TaskOperation
from taskpilot.core.store import StoreGroup, create_store_group
from taskpilot.gateway.services.llm_service import LLMService


class FakeIntentClassifier:
    """返回预设操作的 IntentClassifier"""

    def __init__(self) -> None:
        self.operation: TaskOperation = ListTasksOperation()
        self.calls: list[str] = []

    async def classify(self, text: str) -> TaskOperation:
        self.calls.append(text)
        return self.operation


class FakeReplyNarrator:
    """返回固定格式回复的 ReplyNarrator"""

    def __init__(self) -> None:
        self.calls: list[tuple[TaskOperation, OperationResult]] = []

    async def narrate(self, operation: TaskOperation, result: OperationResult) -> str:
        self.calls.append((operation, result))
        return f"Done: {operation.action}"


@pytest.fixture
def classifier() -> FakeIntentClassifier:
    return FakeIntentClassifier()


@pytest.fixture
def narrator() -> FakeReplyNarrator:
    return FakeReplyNarrator()


@pytest_asyncio.fixture
async def store_group(tmp_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """Gateway 测试用 StoreGroup"""
    group = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    yield group
    await group.conn.close()


@pytest_asyncio.fixture
async def test_app(monkeypatch, store_group, classifier, narrator):
    """创建测试用 FastAPI app 实例"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from taskpilot.gateway.main import create_app

    app = create_app()

    # 手动初始化（绕过 lifespan）
    app.state.store_group = store_group
    app.state.llm_service = LLMService()
    app.state.intent_classifier = classifier
    app.state.reply_narrator = narrator

    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
