from fastapi import Depends
from sqlalchemy.orm import Session

from database.db import SessionLocal
from services.grade_sync import GradeSyncService
from services.pdf_service import PDFService
from services.record_store import RecordStore, SqlRecordStore
from services.student_service import StudentService
from services.subject_service import SubjectService


# ==========================================================
# [common] DB session per request
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlRecordStore(db)


def get_grade_sync(store: RecordStore = Depends(get_store)) -> GradeSyncService:
    return GradeSyncService(store)


def get_student_service(store: RecordStore = Depends(get_store)) -> StudentService:
    return StudentService(store)


def get_subject_service(store: RecordStore = Depends(get_store)) -> SubjectService:
    return SubjectService(store)


pdf_service = PDFService()


def get_pdf_service() -> PDFService:
    return pdf_service
