from fastapi import APIRouter, Depends

from dependencies.store import get_student_service
from schemas.students import StudentCreate
from services.student_service import StudentService
from utils.errors import NotFound

router = APIRouter(prefix="/students", tags=["students"])


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] add student (+ blank grade record)
@router.post("/")
def create_student(student: StudentCreate, service: StudentService = Depends(get_student_service)):
    created, warnings = service.add_student(student)
    return {
        "success": True,
        "data": created.model_dump(),
        "warnings": warnings,
        "message": "Student added successfully",
    }


# ✅ [READ] roster
@router.get("/")
def read_students(service: StudentService = Depends(get_student_service)):
    records = service.list_students()
    return {
        "success": True,
        "data": [r.model_dump() for r in records],
        "message": "Students loaded",
    }


# ==========================================================
# [2] single student
# ==========================================================

# ✅ [READ] student detail
@router.get("/{student_id}")
def read_student(student_id: int, service: StudentService = Depends(get_student_service)):
    student = service.get_student(student_id)
    if student is None:
        raise NotFound("student", student_id)
    return {"success": True, "data": student.model_dump(), "message": "Student loaded"}


# ✅ [UPDATE] edit student (+ rename grade records)
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentCreate, service: StudentService = Depends(get_student_service)):
    student, warnings = service.edit_student(student_id, updated)
    if student is None:
        raise NotFound("student", student_id)
    return {
        "success": True,
        "data": student.model_dump(),
        "warnings": warnings,
        "message": "Student updated successfully",
    }


# ✅ [DELETE] remove student (+ grade records)
@router.delete("/{student_id}")
def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    deleted, warnings = service.remove_student(student_id)
    if not deleted:
        raise NotFound("student", student_id)
    return {
        "success": True,
        "data": {"student_id": student_id},
        "warnings": warnings,
        "message": "Student deleted successfully",
    }
