"""ChatService -- 一轮对话的编排

严格顺序执行：
1. 持久化用户消息
2. 意图解析（不抛出）
3. 执行操作（异常折叠为 success=False）
4. 生成回复（不抛出）
5. 持久化助手消息

只有消息持久化失败会向外抛出。
"""

from datetime import UTC, datetime

import structlog
from taskpilot.core.config import MESSAGE_PREVIEW_LENGTH
from taskpilot.core.models import CamelModel, ChatMessage, ChatRole, OperationResult
from taskpilot.core.store import StoreGroup, append_chat_message
from ulid import ULID

from .operation_executor import OperationExecutor
from .ports import IntentClassifier, ReplyNarrator

log = structlog.get_logger()


class ChatTurn(CamelModel):
    """POST /api/chat 响应体"""

    user_message: ChatMessage
    ai_message: ChatMessage
    operation_result: OperationResult


class ChatService:
    """对话业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        classifier: IntentClassifier,
        narrator: ReplyNarrator,
        executor: OperationExecutor | None = None,
    ) -> None:
        self._stores = store_group
        self._classifier = classifier
        self._narrator = narrator
        self._executor = executor or OperationExecutor(store_group)

    async def handle_message(self, content: str) -> ChatTurn:
        """处理一条用户消息

        Args:
            content: 非空用户消息

        Returns:
            ChatTurn；操作失败时 operation_result.success 为 False，调用方仍返回 200
        """
        user_message = ChatMessage(
            id=str(ULID()),
            content=content,
            role=ChatRole.USER,
            created_at=datetime.now(UTC),
        )
        await append_chat_message(self._stores.conn, self._stores.chat_store, user_message)
        await log.ainfo(
            "chat_message_received",
            message_id=user_message.id,
            content_preview=content[:MESSAGE_PREVIEW_LENGTH],
        )

        operation = await self._classifier.classify(content)

        try:
            result = await self._executor.execute(operation, content)
        except Exception as e:
            await log.aerror(
                "chat_operation_failed",
                action=operation.action,
                task_id=operation.task_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            result = OperationResult(success=False, error=str(e))

        reply = await self._narrator.narrate(operation, result)

        ai_message = ChatMessage(
            id=str(ULID()),
            content=reply,
            role=ChatRole.ASSISTANT,
            task_id=result.affected_task_id,
            created_at=datetime.now(UTC),
        )
        await append_chat_message(self._stores.conn, self._stores.chat_store, ai_message)
        await log.ainfo(
            "chat_turn_completed",
            action=operation.action,
            success=result.success,
            task_id=ai_message.task_id,
        )

        return ChatTurn(
            user_message=user_message,
            ai_message=ai_message,
            operation_result=result,
        )
