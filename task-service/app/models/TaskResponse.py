from pydantic import BaseModel

from app.models.Task import Task
from app.models.dates import format_due_date


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str
    status: str
    due_date: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            due_date=format_due_date(task.due_date),
        )
