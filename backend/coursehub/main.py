# coursehub/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .database.base import Base
from .database.session import engine
from .config import settings
from .exceptions import register_exception_handlers
from .logging_config import setup_logging

# Import all models to ensure they're registered with Base
from .database.models.admin import Admin
from .database.models.staff import Staff
from .database.models.student import Student
from .database.models.course import Course
from .database.models.enrollment import Enrollment

from .routers import admins, auth, courses, enrollments, staff, students

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Student Course Management System",
    description="Role-based course catalog, enrollment and authentication API",
    version="1.0.0"
)

# CORS middleware for the React frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Create all database tables
Base.metadata.create_all(bind=engine)

app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(enrollments.router)
app.include_router(admins.router)
app.include_router(students.router)
app.include_router(staff.router)

logger.info(f"Course Hub API started ({settings.ENVIRONMENT})")

@app.get("/")
def root():
    return {
        "status": "ok",
        "service": "Student Course Management System API",
        "version": "1.0.0"
    }

@app.get("/api/health")
def health_check():
    return {"status": "OK", "message": "Server is running"}

#   cd backend
#   python -m uvicorn coursehub.main:app --reload
#   API docs (interactive): http://127.0.0.1:8000/docs
