# coursehub/routers/admins.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database.models.user import UserType
from ..database.session import get_db
from ..middleware.auth_guard import admin_only
from ..schemas.admin import AdminCreateRequest
from ..services.auth.credential_service import CredentialService

router = APIRouter(prefix="/api/admins", tags=["admins"], dependencies=[Depends(admin_only)])

@router.get("")
def list_admins(db: Session = Depends(get_db)):
    return [a.to_dict() for a in CredentialService.list_all(db, UserType.ADMIN)]

@router.post("", status_code=status.HTTP_201_CREATED)
def create_admin(payload: AdminCreateRequest, db: Session = Depends(get_db)):
    admin = CredentialService.create(
        db,
        UserType.ADMIN,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        role=payload.role
    )
    return admin.to_dict()

@router.delete("/{admin_id}")
def delete_admin(admin_id: str, db: Session = Depends(get_db)):
    CredentialService.delete(db, UserType.ADMIN, admin_id)
    return {"message": "Admin removed"}
