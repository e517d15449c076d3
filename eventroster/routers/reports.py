"""Moderation report API route."""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from eventroster.auth import get_current_uid
from eventroster.database import get_db
from eventroster.schemas.report import ReportCreate
from eventroster.services import moderation_service

router = APIRouter()


@router.post("/", status_code=status.HTTP_202_ACCEPTED)
def submit_report(payload: ReportCreate, uid: str = Depends(get_current_uid), db: Session = Depends(get_db)):
    """File a report. The caller gets no report body back."""
    moderation_service.submit_report(db, uid, payload.type, payload.target_id, payload.reason)
    return Response(status_code=status.HTTP_202_ACCEPTED)
