# coursehub/routers/staff.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database.models.user import UserType
from ..database.session import get_db
from ..middleware.auth_guard import admin_only
from ..services.auth.credential_service import CredentialService

router = APIRouter(prefix="/api/staff", tags=["staff"], dependencies=[Depends(admin_only)])

@router.get("")
def list_staff(db: Session = Depends(get_db)):
    return [s.to_dict() for s in CredentialService.list_all(db, UserType.STAFF)]

@router.delete("/{staff_id}")
def delete_staff(staff_id: str, db: Session = Depends(get_db)):
    """Remove a staff member; their courses stay in the catalog without an instructor account"""
    CredentialService.delete(db, UserType.STAFF, staff_id)
    return {"message": "Staff removed"}
