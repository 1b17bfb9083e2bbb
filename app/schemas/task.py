"""
Task Schemas
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict


class TaskCreate(BaseModel):
    t_title: str = ""


class TaskUpdate(BaseModel):
    t_title: Optional[str] = None
    t_completed: Optional[bool] = None


class Task(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    t_id: int
    t_owner_email: str
    t_title: str
    t_completed: bool
    t_created_at: Optional[datetime] = None
    t_updated_at: Optional[datetime] = None
