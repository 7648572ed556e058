"""Task persistence operations on the ``tasks`` table."""

from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.database import StorageError, tasks
from app.models import Task
from app.models.dates import as_utc


class TaskNotFoundError(Exception):
    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


_columns = (tasks.c.id, tasks.c.title, tasks.c.description, tasks.c.status, tasks.c.due_date)


def _row_to_task(row) -> Task:
    return Task(
        id=row.id,
        title=row.title,
        description=row.description or "",
        status=row.status,
        due_date=as_utc(row.due_date),
    )


def _values(task: Task) -> dict:
    return {
        "title": task.title,
        "description": task.description,
        "status": task.status,
        "due_date": as_utc(task.due_date),
    }


class TaskService:
    def __init__(self, engine: Engine):
        self.engine = engine

    def create(self, task: Task) -> Task:
        """Insert ``task`` and return the row as stored.

        The insert and the re-read are separate statements; a row deleted in
        between is reported as a storage failure.
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(insert(tasks).values(**_values(task)))
                new_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            raise StorageError("error inserting task") from e

        try:
            return self.get(new_id)
        except TaskNotFoundError as e:
            raise StorageError(f"error fetching created task {new_id}") from e

    def list(self) -> List[Task]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(select(*_columns)).all()
        except SQLAlchemyError as e:
            raise StorageError("error querying tasks") from e
        return [_row_to_task(row) for row in rows]

    def get(self, task_id: int) -> Task:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(select(*_columns).where(tasks.c.id == task_id)).first()
        except SQLAlchemyError as e:
            raise StorageError(f"error fetching task {task_id}") from e
        if row is None:
            raise TaskNotFoundError(task_id)
        return _row_to_task(row)

    def update(self, task: Task) -> None:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    update(tasks).where(tasks.c.id == task.id).values(**_values(task))
                )
        except SQLAlchemyError as e:
            raise StorageError(f"error updating task {task.id}") from e
        if result.rowcount == 0:
            raise TaskNotFoundError(task.id)

    def delete(self, task_id: int) -> None:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(delete(tasks).where(tasks.c.id == task_id))
        except SQLAlchemyError as e:
            raise StorageError(f"error deleting task {task_id}") from e
        if result.rowcount == 0:
            raise TaskNotFoundError(task_id)
