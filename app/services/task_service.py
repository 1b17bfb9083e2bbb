"""
Task Service - Personal tasks scoped to their owner
"""
from typing import List
from sqlalchemy.orm import Session

from app.repositories.task_repository import TaskRepository
from app.models.task import Task as TaskModel
from app.schemas.task import Task, TaskCreate, TaskUpdate
from app.core.exceptions import ValidationException
from atams.exceptions import NotFoundException, ForbiddenException


class TaskService:
    def __init__(self) -> None:
        self.repo = TaskRepository()

    def _get_owned(self, db: Session, email: str, task_id: int) -> TaskModel:
        task = self.repo.get(db, task_id)
        if not task:
            raise NotFoundException("Task not found")
        if task.t_owner_email != email:
            raise ForbiddenException("You can only modify your own tasks")
        return task

    def list_tasks(self, db: Session, email: str) -> List[Task]:
        tasks = self.repo.get_by_owner(db, email)
        return [Task.model_validate(t) for t in tasks]

    def create_task(self, db: Session, email: str, payload: TaskCreate) -> Task:
        title = payload.t_title.strip()
        if not title:
            raise ValidationException("Task title is required")

        task = self.repo.create(db, {
            "t_owner_email": email,
            "t_title": title,
            "t_completed": False
        })
        return Task.model_validate(task)

    def update_task(self, db: Session, email: str, task_id: int, payload: TaskUpdate) -> Task:
        task = self._get_owned(db, email, task_id)

        update_data = {}
        if payload.t_title is not None and payload.t_title.strip():
            update_data["t_title"] = payload.t_title.strip()
        if payload.t_completed is not None:
            update_data["t_completed"] = payload.t_completed

        task = self.repo.update(db, task, update_data)
        return Task.model_validate(task)

    def delete_task(self, db: Session, email: str, task_id: int) -> None:
        task = self._get_owned(db, email, task_id)
        self.repo.delete(db, task.t_id)
