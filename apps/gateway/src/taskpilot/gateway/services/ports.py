"""对话流水线的能力接口

意图解析与回复生成都依赖托管模型；流水线只依赖这两个接口，
测试中可注入确定性的替身实现。
"""

from typing import Protocol

from taskpilot.core.models import OperationResult, TaskOperation


class IntentClassifier(Protocol):
    """把自由文本归类为结构化操作"""

    async def classify(self, text: str) -> TaskOperation:
        """永不抛出异常；失败时返回安全默认操作"""
        ...


class ReplyNarrator(Protocol):
    """把操作及其结果转述为自然语言回复"""

    async def narrate(self, operation: TaskOperation, result: OperationResult) -> str:
        """永不抛出异常；失败时返回兜底文案"""
        ...
