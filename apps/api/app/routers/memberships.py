"""Memberships router."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_csrf_header
from app.core.errors import NotFoundError
from app.db.models import Membership
from app.schemas.membership import MembershipCreate, MembershipRead, MembershipUpdate
from app.services import membership_service

router = APIRouter(prefix="/memberships", tags=["memberships"])


def _get_membership_or_404(db: Session, membership_id: UUID) -> Membership:
    membership = membership_service.get_membership(db, membership_id)
    if not membership:
        raise HTTPException(status_code=404, detail="Membership not found")
    return membership


@router.get("", response_model=list[MembershipRead])
def list_memberships(
    q: Optional[str] = Query(None, max_length=100, description="Search contact name or code"),
    status: Optional[str] = Query(None, description="Status filter ('all' for none)"),
    db: Session = Depends(get_db),
):
    return [
        membership_service.to_membership_read(m)
        for m in membership_service.list_memberships(db, q=q, status=status)
    ]


@router.post(
    "",
    response_model=MembershipRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_membership(data: MembershipCreate, db: Session = Depends(get_db)):
    try:
        membership = membership_service.create_membership(
            db,
            contact_id=data.contact_id,
            membership_type=data.membership_type,
            start_date=data.start_date,
            end_date=data.end_date,
            code=data.code,
            status=data.status.value,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return membership_service.to_membership_read(membership)


@router.get("/{membership_id:uuid}", response_model=MembershipRead)
def get_membership(membership_id: UUID, db: Session = Depends(get_db)):
    return membership_service.to_membership_read(_get_membership_or_404(db, membership_id))


@router.put(
    "/{membership_id:uuid}",
    response_model=MembershipRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_membership(membership_id: UUID, data: MembershipUpdate, db: Session = Depends(get_db)):
    membership = _get_membership_or_404(db, membership_id)
    membership = membership_service.update_membership(
        db,
        membership,
        membership_type=data.membership_type,
        start_date=data.start_date,
        end_date=data.end_date,
        code=data.code,
        status=data.status.value,
    )
    return membership_service.to_membership_read(membership)


@router.delete(
    "/{membership_id:uuid}",
    status_code=204,
    dependencies=[Depends(require_csrf_header)],
)
def delete_membership(membership_id: UUID, db: Session = Depends(get_db)):
    membership_service.delete_membership(db, _get_membership_or_404(db, membership_id))
