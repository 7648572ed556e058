from app.models.Task import Task
from app.models.TaskCreate import TaskCreate
from app.models.TaskUpdate import TaskUpdate
from app.models.TaskResponse import TaskResponse
from app.models.dates import format_due_date, parse_due_date

__all__ = ["Task", "TaskCreate", "TaskUpdate", "TaskResponse", "format_due_date", "parse_due_date"]
