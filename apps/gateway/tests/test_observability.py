"""可观测性测试

测试内容：
1. HTTP 请求含 X-Request-ID 响应头
2. TraceMiddleware 的 task_id 提取
3. structlog 配置
4. 外部 X-Request-ID 沿用规则
"""

import logging

import structlog
from httpx import AsyncClient
from taskpilot.gateway.middleware.logging_config import NOISY_LOGGERS, setup_logging
from taskpilot.gateway.middleware.logging_mw import resolve_request_id
from taskpilot.gateway.middleware.trace_mw import extract_task_id
from ulid import ULID


class TestObservability:
    async def test_request_id_in_response_header(self, client: AsyncClient):
        resp = await client.get("/api/health")

        request_id = resp.headers.get("X-Request-ID")
        assert request_id is not None
        assert len(request_id) == 26
        ULID.from_str(request_id)

    async def test_request_ids_unique(self, client: AsyncClient):
        first = await client.get("/api/health")
        second = await client.get("/api/health")
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    async def test_request_id_on_error_response(self, client: AsyncClient):
        resp = await client.get("/api/tasks/missing")
        assert resp.status_code == 404
        assert "X-Request-ID" in resp.headers

    def test_extract_task_id(self):
        assert extract_task_id("/api/tasks/01JTASK0000000000000000001") == (
            "01JTASK0000000000000000001"
        )
        assert extract_task_id("/api/tasks/abc/activities") == "abc"
        assert extract_task_id("/api/tasks") is None
        assert extract_task_id("/api/tasks/") is None
        assert extract_task_id("/api/chat") is None

    def test_setup_logging_json(self, monkeypatch):
        monkeypatch.setenv("TASKPILOT_LOG_FORMAT", "json")
        setup_logging()
        assert structlog.is_configured()

    def test_noisy_loggers_quieted(self, monkeypatch):
        monkeypatch.setenv("TASKPILOT_LOG_LEVEL", "INFO")
        setup_logging()
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_noisy_loggers_follow_debug(self, monkeypatch):
        monkeypatch.setenv("TASKPILOT_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert logging.getLogger("LiteLLM").level == logging.DEBUG


class TestRequestIdPropagation:
    async def test_incoming_request_id_reused(self, client: AsyncClient):
        resp = await client.get("/api/tasks", headers={"X-Request-ID": "web-7f3a.42"})
        assert resp.headers["X-Request-ID"] == "web-7f3a.42"

    async def test_malformed_request_id_replaced(self, client: AsyncClient):
        resp = await client.get("/api/tasks", headers={"X-Request-ID": "a b c"})

        request_id = resp.headers["X-Request-ID"]
        assert request_id != "a b c"
        ULID.from_str(request_id)

    def test_resolve_request_id(self):
        assert resolve_request_id("abc-123") == "abc-123"
        assert len(resolve_request_id(None)) == 26
        assert len(resolve_request_id("x" * 65)) == 26
