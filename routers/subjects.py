from fastapi import APIRouter, Depends

from dependencies.store import get_subject_service
from schemas.subjects import SubjectCreate
from services.subject_service import SubjectService
from utils.errors import NotFound

router = APIRouter(prefix="/subjects", tags=["subjects"])


# ✅ [CREATE] add subject
@router.post("/")
def create_subject(subject: SubjectCreate, service: SubjectService = Depends(get_subject_service)):
    created = service.save_subject(subject)
    return {
        "success": True,
        "data": created.model_dump(mode="json"),
        "message": "Subject saved successfully",
    }


# ✅ [READ] all subjects, newest first
@router.get("/")
def read_subjects(service: SubjectService = Depends(get_subject_service)):
    records = service.list_subjects()
    return {
        "success": True,
        "data": [r.model_dump(mode="json") for r in records],
        "message": "Subjects loaded",
    }


# ✅ [READ] subject names for the grade view selector
@router.get("/choices")
def read_subject_choices(service: SubjectService = Depends(get_subject_service)):
    return {"success": True, "data": service.subject_choices()}


# ✅ [READ] subject detail
@router.get("/{subject_id}")
def read_subject(subject_id: int, service: SubjectService = Depends(get_subject_service)):
    subject = service.get_subject(subject_id)
    if subject is None:
        raise NotFound("subject", subject_id)
    return {"success": True, "data": subject.model_dump(mode="json"), "message": "Subject loaded"}


# ✅ [UPDATE] edit subject
@router.put("/{subject_id}")
def update_subject(subject_id: int, updated: SubjectCreate, service: SubjectService = Depends(get_subject_service)):
    subject = service.save_subject(updated, subject_id)
    if subject is None:
        raise NotFound("subject", subject_id)
    return {
        "success": True,
        "data": subject.model_dump(mode="json"),
        "message": "Subject saved successfully",
    }


# ✅ [DELETE] delete subject (grade records are kept)
@router.delete("/{subject_id}")
def delete_subject(subject_id: int, service: SubjectService = Depends(get_subject_service)):
    if not service.delete_subject(subject_id):
        raise NotFound("subject", subject_id)
    return {
        "success": True,
        "data": {"subject_id": subject_id},
        "message": "Subject deleted successfully",
    }
