"""CLI 入口模块 -- python -m taskpilot.core <command>

支持的命令：
  seed  写入 eRupi 试点项目的 17 个初始任务（任务表非空时跳过）
"""

import asyncio
import sys

from .config import get_db_path


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskpilot.core <command>")
        print("命令:")
        print("  seed  写入 eRupi 试点项目初始任务")
        sys.exit(1)

    command = sys.argv[1]

    if command == "seed":
        asyncio.run(seed())
    else:
        print(f"未知命令: {command}")
        print("可用命令: seed")
        sys.exit(1)


async def seed() -> None:
    """执行初始任务写入"""
    from .seed import seed_pilot_tasks
    from .store import create_store_group

    db_path = get_db_path()

    print(f"数据库路径: {db_path}")
    print("开始写入试点任务...")

    store_group = await create_store_group(db_path)

    try:
        created = await seed_pilot_tasks(store_group)
        if created:
            print(f"写入完成，共创建 {created} 个任务")
        else:
            print("任务表非空，跳过写入")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
