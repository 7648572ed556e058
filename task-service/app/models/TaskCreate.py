from typing import Optional

from pydantic import BaseModel, StrictStr

from app.models.Task import Task
from app.models.dates import parse_due_date


class TaskCreate(BaseModel):
    title: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    status: Optional[StrictStr] = None
    due_date: Optional[StrictStr] = None

    def to_task(self, task_id: Optional[int] = None) -> Task:
        return Task(
            id=task_id,
            title=self.title or "",
            description=self.description or "",
            status=self.status or "",
            due_date=parse_due_date(self.due_date),
        )
