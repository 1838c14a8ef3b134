"""ResponseGenerator 单元测试"""

import json

from taskpilot.core.models import CompleteOperation, OperationResult
from taskpilot.gateway.services.llm_service import LLMService
from taskpilot.gateway.services.response_generator import (
    EMPTY_REPLY,
    FALLBACK_REPLY,
    RESPONSE_SYSTEM_PROMPT,
    ResponseGenerator,
    build_result_prompt,
)
from taskpilot.provider import ModelCallResult, ProviderError


class ScriptedClient:
    def __init__(self, content: str = "", error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def complete(self, messages, model, response_format=None, **kwargs):
        self.calls.append({"messages": messages, "response_format": response_format})
        if self.error is not None:
            raise self.error
        return ModelCallResult(content=self.content, model_name=model, duration_ms=1)

    async def health_check(self) -> bool:
        return True


def _generator(client: ScriptedClient) -> ResponseGenerator:
    return ResponseGenerator(LLMService(client))


class TestBuildResultPrompt:
    def test_contains_operation_and_result(self):
        op = CompleteOperation(task_id="t1")
        result = OperationResult(success=False, error="Task with id t1 does not exist")

        prompt = build_result_prompt(op, result)

        assert prompt.startswith("Task operation completed:\nOperation: complete\n")
        assert "Task ID: t1" in prompt
        assert "Title: N/A" in prompt
        assert prompt.endswith("Generate a helpful response about what happened.")
        payload = prompt.split("Result: ", 1)[1].split("\n\nGenerate", 1)[0]
        assert json.loads(payload) == {
            "success": False,
            "error": "Task with id t1 does not exist",
        }


class TestResponseGenerator:
    async def test_returns_model_text(self):
        client = ScriptedClient("Task 3 is now completed. Nice progress!")

        reply = await _generator(client).narrate(
            CompleteOperation(task_id="3"), OperationResult(success=True)
        )

        assert reply == "Task 3 is now completed. Nice progress!"
        call = client.calls[0]
        assert call["response_format"] is None
        assert call["messages"][0] == {"role": "system", "content": RESPONSE_SYSTEM_PROMPT}
        assert call["messages"][1]["role"] == "user"

    def test_system_prompt_context(self):
        assert "GPay" in RESPONSE_SYSTEM_PROMPT
        assert "17 key tasks" in RESPONSE_SYSTEM_PROMPT
        assert "ICICI" in RESPONSE_SYSTEM_PROMPT
        assert "test eRupi vouchers in real market conditions" in RESPONSE_SYSTEM_PROMPT

    async def test_failed_operation_reaches_model(self):
        """失败的操作连同错误信息一起交给模型，提示词要求解释错误"""
        client = ScriptedClient("Task 9 does not exist. Try listing tasks first.")
        result = OperationResult(success=False, error="Task with id 9 does not exist")

        await _generator(client).narrate(CompleteOperation(task_id="9"), result)

        system, user = client.calls[0]["messages"]
        assert "If there was an error, explain it clearly and suggest next steps." in (
            system["content"]
        )
        assert "Task with id 9 does not exist" in user["content"]

    async def test_empty_content(self):
        reply = await _generator(ScriptedClient("")).narrate(
            CompleteOperation(task_id="3"), OperationResult(success=True)
        )
        assert reply == EMPTY_REPLY == "Task operation completed successfully."

    async def test_failure_returns_fallback(self):
        client = ScriptedClient(error=ProviderError("LLM call failed: quota"))

        reply = await _generator(client).narrate(
            CompleteOperation(task_id="3"), OperationResult(success=True)
        )

        assert reply == FALLBACK_REPLY
        assert "There was an issue generating a detailed response." in reply
