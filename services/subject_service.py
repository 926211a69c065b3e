import logging
from typing import List, Optional

from config.settings import settings
from schemas.subjects import Subject, SubjectCreate
from services.record_store import RecordStore
from utils.errors import StoreFailure, require_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("subject_code", "subject_name", "instructor")


class SubjectService:
    def __init__(self, store: RecordStore, default_subjects: Optional[List[str]] = None):
        self.store = store
        self.default_subjects = list(default_subjects if default_subjects is not None else settings.DEFAULT_SUBJECTS)

    def list_subjects(self) -> List[Subject]:
        """Newest first. A failed read is logged and shows as an empty list."""
        try:
            return self.store.list_subjects()
        except StoreFailure as e:
            logger.error(f"fetch error: {e}")
            return []

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        return self.store.get_subject(subject_id)

    def save_subject(self, payload: SubjectCreate, subject_id: Optional[int] = None) -> Optional[Subject]:
        data = payload.model_dump()
        require_fields(data, REQUIRED_FIELDS)
        data = {k: v.strip() for k, v in data.items()}

        if subject_id is None:
            return self.store.insert_subject(data)
        return self.store.update_subject(subject_id, data)

    def delete_subject(self, subject_id: int) -> bool:
        return self.store.delete_subject(subject_id)

    def subject_choices(self) -> List[str]:
        """Names offered by the grade view selector."""
        names = []
        for subject in self.list_subjects():
            if subject.subject_name not in names:
                names.append(subject.subject_name)
        return names or list(self.default_subjects)
