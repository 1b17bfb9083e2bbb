"""
Task Repository - Data access layer for tasks
"""
from typing import List
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from app.models.task import Task


class TaskRepository(BaseRepository[Task]):
    def __init__(self):
        super().__init__(Task)

    def get_by_owner(self, db: Session, email: str) -> List[Task]:
        return db.query(Task).filter(Task.t_owner_email == email).order_by(Task.t_id.asc()).all()
