"""Task service layer."""

import logging
from datetime import datetime

from projectstore.domains.base import ChildRecordService
from projectstore.exceptions.project import TaskNotFoundError
from projectstore.schemas.todo import (
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    next_status,
)
from projectstore.shared.kinds import EntityKind

logger = logging.getLogger(__name__)


class TaskService(ChildRecordService[Task]):
    """Service class for task business logic."""

    kind = EntityKind.TASK
    record_schema = Task
    not_found_error = TaskNotFoundError

    def _resource(self):
        return self.backend.todos

    def _build(self, project_id: str, record_id: str, data: TaskCreate, now: datetime) -> Task:
        return Task(
            id=record_id,
            project_id=project_id,
            title=data.title,
            description=data.description,
            status=TaskStatus.pending,
            priority=data.priority or TaskPriority.medium,
            due_date=data.due_date,
            created_at=now,
            updated_at=now,
        )

    async def toggle_task_status(self, project_id: str, task: Task) -> Task:
        """Advance ``task`` one step along pending, in progress, completed."""
        status = next_status(task.status)
        logger.debug("Toggling task %s from %s to %s", task.id, task.status.value, status.value)
        return await self.update(project_id, task.id, TaskUpdate(status=status))
