"""Provider 包测试 fixtures"""

import pytest


@pytest.fixture
def sample_messages() -> list[dict[str, str]]:
    """标准 messages 格式测试数据"""
    return [{"role": "user", "content": "Show me all tasks"}]


@pytest.fixture
def multi_turn_messages() -> list[dict[str, str]]:
    """多轮对话 messages 测试数据"""
    return [
        {"role": "system", "content": "You are a task assistant."},
        {"role": "user", "content": "What is pending?"},
        {"role": "assistant", "content": "Three tasks are pending."},
        {"role": "user", "content": "Mark task 3 as done."},
    ]
