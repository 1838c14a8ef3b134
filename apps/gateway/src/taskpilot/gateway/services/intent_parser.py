"""IntentParser -- 自由文本 -> TaskOperation

一次模型调用，固定系统提示词 + JSON object 响应格式约束。
调用异常或内容无法解析时返回 ListTasksOperation，不重试、不向外抛出。
"""

import json

import structlog
from taskpilot.core.models import KNOWN_ACTIONS, ListTasksOperation, TaskOperation, parse_operation
from taskpilot.provider import MalformedResponseError

from .llm_service import LLMService

log = structlog.get_logger()

JSON_OBJECT_FORMAT = {"type": "json_object"}

INTENT_SYSTEM_PROMPT = f"""You are an AI assistant for the eRupi Pilot Program task management system. Parse user requests into task operations.

Available actions:
- create: Create a new task
- update: Update existing task details (title, description, status, priority, assignedTo, dueDate)
- complete: Mark a task as completed
- delete: Remove a task
- add_remark: Add activity/comment to a task
- get_status: Get status of specific task or overall progress
- list_tasks: List all tasks or filtered tasks

Extract relevant information and respond with JSON in this format:
{{
  "action": "{'|'.join(KNOWN_ACTIONS)}",
  "taskId": "optional - only for update/complete/delete/add_remark/get_status",
  "title": "optional - for create/update",
  "description": "optional - for create/update",
  "status": "optional - for update (not_started|in_progress|completed|failed)",
  "priority": "optional - for create/update (low|medium|high|critical)",
  "assignedTo": "optional - for create/update",
  "dueDate": "optional - for create/update (ISO date string)",
  "remarks": "optional - for add_remark"
}}

If user mentions specific task by number/title, try to match it. Be intelligent about inferring the intent."""


class IntentParser:
    """基于托管模型的 IntentClassifier 实现"""

    def __init__(self, llm_service: LLMService) -> None:
        self._llm = llm_service

    async def classify(self, text: str) -> TaskOperation:
        """解析用户意图

        Args:
            text: 用户原始消息（非空）

        Returns:
            结构化操作；任何失败都返回 ListTasksOperation()
        """
        try:
            result = await self._llm.call(
                [
                    {"role": "system", "content": INTENT_SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                response_format=JSON_OBJECT_FORMAT,
            )
            raw = result.content or "{}"
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise MalformedResponseError(
                    f"expected a JSON object, got {type(data).__name__}",
                    raw_content=raw,
                )
            operation = parse_operation(data)
        except Exception as e:
            log.warning(
                "intent_parse_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return ListTasksOperation()

        log.info(
            "intent_parsed",
            action=operation.action,
            task_id=operation.task_id,
        )
        return operation
