"""eRupi 试点项目初始任务

试点计划沟通文档中的 17 个关键任务：商场合作、项目设置、客户开通、监控。
"""

from datetime import UTC, datetime

import structlog
from ulid import ULID

from .models import Activity, ActivityType, ActorId, Task, TaskPriority, TaskStatus
from .store import StoreGroup, create_task_with_activity

log = structlog.get_logger()

ERUPI_PILOT_TASKS: list[dict] = [
    {
        "title": "Finalize two Malls and communicate with Malls",
        "description": "Obtain consent to participate in program and establish partnership agreements",
        "priority": TaskPriority.HIGH,
        "assigned_to": "Partnership Team",
        "due_date": "2024-02-01",
    },
    {
        "title": "Define nature of Program",
        "description": (
            "Define Title, participating merchants, T&C, How to Use, "
            "Artwork for voucher, Brand and Logo Images"
        ),
        "priority": TaskPriority.HIGH,
        "assigned_to": "Design Team",
        "due_date": "2024-02-05",
    },
    {
        "title": "Obtain/Repurpose MID from bank",
        "description": (
            "Get MID from ICICI clearly showing Fincentive - Mall Name - pilot in voucher title"
        ),
        "priority": TaskPriority.CRITICAL,
        "assigned_to": "Banking Team",
        "due_date": "2024-02-10",
    },
    {
        "title": "Mobilising physical field force",
        "description": "Organize and deploy field teams for customer engagement and on-ground operations",
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Operations Team",
        "due_date": "2024-02-15",
    },
    {
        "title": "Collect customer information",
        "description": (
            "Collect customer Name, Mobile number associated with Bank and Gpay. "
            "Install and register Gpay if needed"
        ),
        "priority": TaskPriority.HIGH,
        "assigned_to": "Field Team",
        "due_date": "2024-02-20",
    },
    {
        "title": "Share customer list with Gpay for activation",
        "description": "Coordinate with Gpay team to activate pilot features for prequalified customers",
        "priority": TaskPriority.CRITICAL,
        "assigned_to": "Integration Team",
        "due_date": "2024-02-25",
    },
    {
        "title": "Activate participating merchant",
        "description": "Set up and activate merchant systems for voucher acceptance and processing",
        "priority": TaskPriority.HIGH,
        "assigned_to": "Merchant Team",
        "due_date": "2024-03-01",
    },
    {
        "title": "Create Pilot Test Distributor",
        "description": "Set up internal distributor system for issuing free vouchers to pilot customers",
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Tech Team",
        "due_date": "2024-03-05",
    },
    {
        "title": "Live guide + Video for customers",
        "description": (
            "Create customer education materials and get approval from Gpay and ICICI "
            "for brand guidelines"
        ),
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Marketing Team",
        "due_date": "2024-03-10",
    },
    {
        "title": "Verify Google Pay activation for all customers",
        "description": "Confirm that all pilot participants have successfully activated Google Pay features",
        "priority": TaskPriority.HIGH,
        "assigned_to": "Support Team",
        "due_date": "2024-03-15",
    },
    {
        "title": "Generate Saral codes in bulk",
        "description": "Generate internal voucher codes and send custom email invitations to pilot participants",
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Tech Team",
        "due_date": "2024-03-20",
    },
    {
        "title": "WhatsApp nudge to customers for setting PIN",
        "description": "Send WhatsApp notifications to guide customers through PIN setup process",
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Communication Team",
        "due_date": "2024-03-25",
    },
    {
        "title": "Daily MIS from ICICI",
        "description": (
            "Set up daily reporting from ICICI for PIN setup tracking and failed redemption "
            "data in CSV format"
        ),
        "priority": TaskPriority.HIGH,
        "assigned_to": "Data Team",
        "due_date": "2024-03-30",
    },
    {
        "title": "Tracking MIS for pilot objectives",
        "description": (
            "Monitor Saral code issued, eRupi issued, PIN set, Redemption, Failure, "
            "and Expiry metrics"
        ),
        "priority": TaskPriority.CRITICAL,
        "assigned_to": "Analytics Team",
        "due_date": "2024-04-05",
    },
    {
        "title": "Extend Expiry Date capability",
        "description": (
            "Implement voucher extension process in case pilot needs extended duration "
            "for better coverage"
        ),
        "priority": TaskPriority.LOW,
        "assigned_to": "Tech Team",
        "due_date": "2024-04-10",
    },
    {
        "title": "Additional voucher issuance",
        "description": (
            "Capability to issue additional vouchers to same participants or increase "
            "participant count"
        ),
        "priority": TaskPriority.MEDIUM,
        "assigned_to": "Operations Team",
        "due_date": "2024-04-15",
    },
    {
        "title": "Support Queries management",
        "description": (
            "Handle customer support queries and provide assistance throughout the pilot program"
        ),
        "priority": TaskPriority.HIGH,
        "assigned_to": "Support Team",
        "due_date": "2024-04-20",
    },
]


async def seed_pilot_tasks(stores: StoreGroup) -> int:
    """写入试点任务，任务表非空时跳过

    Returns:
        新写入的任务数
    """
    existing = await stores.task_store.count_tasks()
    if existing:
        await log.ainfo("seed_skipped", existing_task_count=existing)
        return 0

    for entry in ERUPI_PILOT_TASKS:
        now = datetime.now(UTC)
        task = Task(
            id=str(ULID()),
            title=entry["title"],
            description=entry["description"],
            status=TaskStatus.NOT_STARTED,
            priority=entry["priority"],
            assigned_to=entry["assigned_to"],
            due_date=datetime.fromisoformat(entry["due_date"]).replace(tzinfo=UTC),
            created_at=now,
            updated_at=now,
        )
        activity = Activity(
            id=str(ULID()),
            task_id=task.id,
            type=ActivityType.CREATED,
            description=f'Task "{task.title}" created',
            remarks=task.description,
            user_id=ActorId.SYSTEM.value,
            created_at=now,
        )
        await create_task_with_activity(
            stores.conn,
            stores.task_store,
            stores.activity_store,
            task,
            activity,
        )
        await log.ainfo("seed_task_created", task_id=task.id, title=task.title)

    return len(ERUPI_PILOT_TASKS)
