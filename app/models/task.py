"""
Task Model - Personal to-do items
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from atams.db import Base


class Task(Base):
    """Task model - Table: tasks"""
    __tablename__ = "tasks"

    t_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    t_owner_email = Column(String(255), nullable=False, index=True)
    t_title = Column(String(255), nullable=False)
    t_completed = Column(Boolean, nullable=False, default=False)
    t_created_at = Column(DateTime, server_default=func.now(), nullable=False)
    t_updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
