import logging
from typing import List, Optional, Tuple

from schemas.students import Student, StudentCreate
from services.grade_sync import GradeSyncService
from services.record_store import RecordStore
from utils.errors import StoreFailure, require_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "student_number")


def _clean(payload: StudentCreate) -> dict:
    data = payload.model_dump()
    require_fields(data, REQUIRED_FIELDS)
    for key in ("first_name", "last_name", "student_number", "course"):
        if isinstance(data.get(key), str):
            data[key] = data[key].strip()
    return data


class StudentService:
    """Roster operations; every write is followed by the matching grade sync hook."""

    def __init__(self, store: RecordStore, sync: Optional[GradeSyncService] = None):
        self.store = store
        self.sync = sync or GradeSyncService(store)

    def list_students(self) -> List[Student]:
        try:
            return self.store.list_students()
        except StoreFailure as e:
            logger.error(f"error fetching students: {e}")
            return []

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.store.get_student(student_id)

    # ✅ add student + blank grade record
    def add_student(self, payload: StudentCreate) -> Tuple[Student, List[str]]:
        data = _clean(payload)
        student = self.store.insert_student(data)

        warnings = []
        try:
            self.sync.on_student_created(student)
        except StoreFailure as e:
            logger.error(f"error creating grade record for {student.full_name}: {e}")
            warnings.append(f"grade record for {student.full_name} was not created")
        return student, warnings

    # ✅ edit student + rename grade records
    def edit_student(self, student_id: int, payload: StudentCreate) -> Tuple[Optional[Student], List[str]]:
        data = _clean(payload)
        student = self.store.update_student(student_id, data)
        if student is None:
            return None, []

        warnings = []
        try:
            self.sync.on_student_updated(student.id, student.first_name, student.last_name)
        except StoreFailure as e:
            logger.error(f"error renaming grade records of student {student_id}: {e}")
            warnings.append(f"grade records of {student.full_name} still carry the old name")
        return student, warnings

    # ✅ delete student + grade records (student deletion is never rolled back)
    def remove_student(self, student_id: int) -> Tuple[bool, List[str]]:
        if not self.store.delete_student(student_id):
            return False, []

        warnings = []
        try:
            self.sync.on_student_deleted(student_id)
        except StoreFailure as e:
            logger.error(f"error deleting grades of student {student_id}: {e}")
            warnings.append(f"grade records of student {student_id} were not deleted")
        return True, warnings
