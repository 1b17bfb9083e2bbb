"""
Task Endpoints - Personal to-do items
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_settings, get_task_service, require_auth
from app.core.config import Settings
from app.services import TaskService
from app.schemas import Task, TaskCreate, TaskUpdate, CurrentUser, DataResponse
from atams.encryption import encrypt_response_data

router = APIRouter(dependencies=[Depends(require_auth)])


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
def list_tasks(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    task_service: TaskService = Depends(get_task_service),
    settings: Settings = Depends(get_settings)
):
    """List the caller's tasks"""
    tasks = task_service.list_tasks(db, current_user.email)

    response = DataResponse(
        success=True,
        message=f"Retrieved {len(tasks)} tasks",
        data=tasks
    )

    return encrypt_response_data(response, settings)


@router.post(
    "",
    response_model=DataResponse[Task],
    status_code=status.HTTP_201_CREATED
)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    task_service: TaskService = Depends(get_task_service)
):
    task = task_service.create_task(db, current_user.email, payload)
    return DataResponse(success=True, message="Task created successfully", data=task)


@router.put(
    "/{task_id}",
    response_model=DataResponse[Task],
    status_code=status.HTTP_200_OK
)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    task_service: TaskService = Depends(get_task_service)
):
    """
    Update title or completion of a task

    **Errors:**
    - 404: Task not found
    - 403: Task belongs to another user
    """
    task = task_service.update_task(db, current_user.email, task_id, payload)
    return DataResponse(success=True, message="Task updated successfully", data=task)


@router.delete(
    "/{task_id}",
    response_model=DataResponse[None],
    status_code=status.HTTP_200_OK
)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(require_auth),
    task_service: TaskService = Depends(get_task_service)
):
    task_service.delete_task(db, current_user.email, task_id)
    return DataResponse(success=True, message="Task deleted successfully")
