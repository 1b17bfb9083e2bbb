from fastapi import APIRouter
from app.api.v1.endpoints import auth, user, attendance, tasks, reservations

api_router = APIRouter()

# Register routes
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(user.router, prefix="/user", tags=["User"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
