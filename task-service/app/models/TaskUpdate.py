from typing import Optional

from app.models.TaskCreate import TaskCreate


class TaskUpdate(TaskCreate):
    # ignored, the id in the path wins
    id: Optional[int] = None
