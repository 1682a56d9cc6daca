# coursehub/routers/students.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database.models.user import UserType
from ..database.session import get_db
from ..middleware.auth_guard import admin_only
from ..services.auth.credential_service import CredentialService

router = APIRouter(prefix="/api/students", tags=["students"], dependencies=[Depends(admin_only)])

@router.get("")
def list_students(db: Session = Depends(get_db)):
    return [s.to_dict() for s in CredentialService.list_all(db, UserType.STUDENT)]

@router.delete("/{student_id}")
def delete_student(student_id: str, db: Session = Depends(get_db)):
    """Remove a student; their active enrollments give their seats back"""
    CredentialService.delete(db, UserType.STUDENT, student_id)
    return {"message": "Student removed"}
