"""ResponseGenerator -- 操作结果 -> 自然语言回复

一次模型调用，无响应格式约束；失败时返回兜底文案，不向外抛出。
"""

import structlog
from taskpilot.core.models import OperationResult, TaskOperation

from .llm_service import LLMService

log = structlog.get_logger()

RESPONSE_SYSTEM_PROMPT = """You are an AI assistant for the eRupi Pilot Program task management system. Generate helpful, conversational responses about task operations.

Be friendly, concise, and informative. Reference specific task details when available. If there was an error, explain it clearly and suggest next steps.

Context about the eRupi Pilot Program:
- This is a voucher pilot program with GPay
- There are 17 key tasks covering mall partnerships, program setup, customer onboarding, and monitoring
- Tasks involve ecosystem partners like ICICI bank, GPay, and malls
- The goal is to test eRupi vouchers in real market conditions"""

EMPTY_REPLY = "Task operation completed successfully."
FALLBACK_REPLY = (
    "Task operation completed. There was an issue generating a detailed response."
)


def build_result_prompt(operation: TaskOperation, result: OperationResult) -> str:
    """组装回复生成的 user 消息"""
    return (
        "Task operation completed:\n"
        f"Operation: {operation.action}\n"
        f"Task ID: {operation.task_id or 'N/A'}\n"
        f"Title: {operation.title or 'N/A'}\n"
        f"Result: {result.model_dump_json(by_alias=True, indent=2)}\n"
        "\n"
        "Generate a helpful response about what happened."
    )


class ResponseGenerator:
    """基于托管模型的 ReplyNarrator 实现"""

    def __init__(self, llm_service: LLMService) -> None:
        self._llm = llm_service

    async def narrate(self, operation: TaskOperation, result: OperationResult) -> str:
        try:
            model_result = await self._llm.call(
                [
                    {"role": "system", "content": RESPONSE_SYSTEM_PROMPT},
                    {"role": "user", "content": build_result_prompt(operation, result)},
                ]
            )
        except Exception as e:
            log.warning(
                "reply_generation_failed",
                action=operation.action,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FALLBACK_REPLY

        return model_result.content or EMPTY_REPLY
