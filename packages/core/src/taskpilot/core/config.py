"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、对话历史默认条数、消息预览截断长度等可配置常量。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()

DEFAULT_CHAT_HISTORY_LIMIT: int = 50


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKPILOT_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKPILOT_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskpilot.db"),
    )


def get_chat_history_limit() -> int:
    """获取对话历史查询的默认条数

    TASKPILOT_CHAT_HISTORY_LIMIT 非正整数时记录警告并使用默认值。
    """
    val = os.environ.get("TASKPILOT_CHAT_HISTORY_LIMIT")
    if not val:
        return DEFAULT_CHAT_HISTORY_LIMIT
    try:
        limit = int(val)
    except ValueError:
        limit = 0
    if limit < 1:
        log.warning(
            "invalid_chat_history_limit_config",
            env_var="TASKPILOT_CHAT_HISTORY_LIMIT",
            value=val,
            fallback=DEFAULT_CHAT_HISTORY_LIMIT,
        )
        return DEFAULT_CHAT_HISTORY_LIMIT
    return limit


# 活动日志中引用对话原文时的截断长度
MESSAGE_PREVIEW_LENGTH: int = 200
