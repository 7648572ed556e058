from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Task:
    title: str
    status: str
    due_date: datetime
    description: str = ""
    id: Optional[int] = None
