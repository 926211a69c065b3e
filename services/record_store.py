"""
services/record_store.py

Record store client for the three collections (students, subjects, grades).

- RecordStore:    abstract interface the services depend on
- SqlRecordStore: SQLAlchemy implementation over one Session

A lookup that matches nothing returns None / [] / False. Only database errors
raise StoreFailure.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.grades import GradeCreate, GradeRecord
from schemas.students import Student
from schemas.subjects import Subject
from utils.errors import StoreFailure

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    # ---------- students ----------
    @abstractmethod
    def list_students(self) -> List[Student]: ...
    @abstractmethod
    def get_student(self, student_id: int) -> Optional[Student]: ...
    @abstractmethod
    def insert_student(self, data: Dict[str, Any]) -> Student: ...
    @abstractmethod
    def update_student(self, student_id: int, data: Dict[str, Any]) -> Optional[Student]: ...
    @abstractmethod
    def delete_student(self, student_id: int) -> bool: ...

    # ---------- subjects ----------
    @abstractmethod
    def list_subjects(self) -> List[Subject]: ...
    @abstractmethod
    def get_subject(self, subject_id: int) -> Optional[Subject]: ...
    @abstractmethod
    def find_subject_by_name(self, subject_name: str) -> Optional[Subject]: ...
    @abstractmethod
    def insert_subject(self, data: Dict[str, Any]) -> Subject: ...
    @abstractmethod
    def update_subject(self, subject_id: int, data: Dict[str, Any]) -> Optional[Subject]: ...
    @abstractmethod
    def delete_subject(self, subject_id: int) -> bool: ...

    # ---------- grades ----------
    @abstractmethod
    def list_grades(self) -> List[GradeRecord]: ...
    @abstractmethod
    def find_grades(
        self,
        subject: Optional[str] = None,
        student_id: Optional[int] = None,
        student_name: Optional[str] = None,
    ) -> List[GradeRecord]: ...
    @abstractmethod
    def find_grade(self, student_id: int, subject: str) -> Optional[GradeRecord]: ...
    @abstractmethod
    def insert_grade(self, grade: GradeCreate) -> GradeRecord: ...
    @abstractmethod
    def insert_grade_if_absent(self, grade: GradeCreate) -> Tuple[GradeRecord, bool]: ...
    @abstractmethod
    def update_grade(self, grade_id: int, data: Dict[str, Any]) -> Optional[GradeRecord]: ...
    @abstractmethod
    def update_grades_for_student(self, student_id: int, data: Dict[str, Any]) -> int: ...
    @abstractmethod
    def delete_grades_for_student(self, student_id: int) -> int: ...


class SqlRecordStore(RecordStore):
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [common] commit / rollback
    # ==========================================================
    def _commit(self, operation: str):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} commit failed: {e}")
            raise StoreFailure(operation, str(e)) from e

    def _read(self, operation: str, fn):
        try:
            return fn()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} failed: {e}")
            raise StoreFailure(operation, str(e)) from e

    def _write(self, operation: str, fn):
        try:
            result = fn()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} failed: {e}")
            raise StoreFailure(operation, str(e)) from e
        self._commit(operation)
        return result

    # ==========================================================
    # [students]
    # ==========================================================
    def list_students(self) -> List[Student]:
        rows = self._read("students.list", lambda: self.db.query(StudentModel).order_by(StudentModel.id).all())
        return [Student.model_validate(r) for r in rows]

    def get_student(self, student_id: int) -> Optional[Student]:
        row = self._read("students.get", lambda: self.db.get(StudentModel, student_id))
        return Student.model_validate(row) if row else None

    def insert_student(self, data: Dict[str, Any]) -> Student:
        row = StudentModel(**data)
        self._write("students.insert", lambda: self.db.add(row))
        self.db.refresh(row)
        return Student.model_validate(row)

    def update_student(self, student_id: int, data: Dict[str, Any]) -> Optional[Student]:
        row = self._read("students.get", lambda: self.db.get(StudentModel, student_id))
        if row is None:
            return None

        def apply():
            for key, value in data.items():
                setattr(row, key, value)

        self._write("students.update", apply)
        self.db.refresh(row)
        return Student.model_validate(row)

    def delete_student(self, student_id: int) -> bool:
        row = self._read("students.get", lambda: self.db.get(StudentModel, student_id))
        if row is None:
            return False
        self._write("students.delete", lambda: self.db.delete(row))
        return True

    # ==========================================================
    # [subjects]
    # ==========================================================
    def list_subjects(self) -> List[Subject]:
        rows = self._read(
            "subjects.list",
            lambda: self.db.query(SubjectModel)
            .order_by(SubjectModel.created_at.desc(), SubjectModel.id.desc())
            .all(),
        )
        return [Subject.model_validate(r) for r in rows]

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        row = self._read("subjects.get", lambda: self.db.get(SubjectModel, subject_id))
        return Subject.model_validate(row) if row else None

    def find_subject_by_name(self, subject_name: str) -> Optional[Subject]:
        row = self._read(
            "subjects.find",
            lambda: self.db.query(SubjectModel)
            .filter(SubjectModel.subject_name == subject_name)
            .order_by(SubjectModel.id)
            .first(),
        )
        return Subject.model_validate(row) if row else None

    def insert_subject(self, data: Dict[str, Any]) -> Subject:
        row = SubjectModel(**data)
        self._write("subjects.insert", lambda: self.db.add(row))
        self.db.refresh(row)
        return Subject.model_validate(row)

    def update_subject(self, subject_id: int, data: Dict[str, Any]) -> Optional[Subject]:
        row = self._read("subjects.get", lambda: self.db.get(SubjectModel, subject_id))
        if row is None:
            return None

        def apply():
            for key, value in data.items():
                setattr(row, key, value)

        self._write("subjects.update", apply)
        self.db.refresh(row)
        return Subject.model_validate(row)

    def delete_subject(self, subject_id: int) -> bool:
        row = self._read("subjects.get", lambda: self.db.get(SubjectModel, subject_id))
        if row is None:
            return False
        self._write("subjects.delete", lambda: self.db.delete(row))
        return True

    # ==========================================================
    # [grades]
    # ==========================================================
    def list_grades(self) -> List[GradeRecord]:
        rows = self._read("grades.list", lambda: self.db.query(GradeModel).order_by(GradeModel.id).all())
        return [GradeRecord.model_validate(r) for r in rows]

    def find_grades(
        self,
        subject: Optional[str] = None,
        student_id: Optional[int] = None,
        student_name: Optional[str] = None,
    ) -> List[GradeRecord]:
        query = self.db.query(GradeModel)
        if subject is not None:
            query = query.filter(GradeModel.subject == subject)
        if student_id is not None:
            query = query.filter(GradeModel.student_id == student_id)
        if student_name is not None:
            query = query.filter(GradeModel.student_name == student_name)
        rows = self._read("grades.find", lambda: query.order_by(GradeModel.id).all())
        return [GradeRecord.model_validate(r) for r in rows]

    def find_grade(self, student_id: int, subject: str) -> Optional[GradeRecord]:
        row = self._read(
            "grades.find_one",
            lambda: self.db.query(GradeModel)
            .filter(GradeModel.student_id == student_id, GradeModel.subject == subject)
            .first(),
        )
        return GradeRecord.model_validate(row) if row else None

    def insert_grade(self, grade: GradeCreate) -> GradeRecord:
        row = GradeModel(**grade.model_dump())
        self._write("grades.insert", lambda: self.db.add(row))
        self.db.refresh(row)
        return GradeRecord.model_validate(row)

    def insert_grade_if_absent(self, grade: GradeCreate) -> Tuple[GradeRecord, bool]:
        """
        Conditional insert keyed on (student_id, subject).
        Returns (record, created). When a concurrent writer wins the race the
        unique constraint rejects this insert and the winner's row is returned.
        """
        existing = self.find_grade(grade.student_id, grade.subject)
        if existing is not None:
            return existing, False

        row = GradeModel(**grade.model_dump())
        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"grade for student {grade.student_id} / {grade.subject} inserted concurrently")
            existing = self.find_grade(grade.student_id, grade.subject)
            if existing is None:
                raise StoreFailure("grades.insert_if_absent", str(e)) from e
            return existing, False
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"grades.insert_if_absent failed: {e}")
            raise StoreFailure("grades.insert_if_absent", str(e)) from e

        self.db.refresh(row)
        return GradeRecord.model_validate(row), True

    def update_grade(self, grade_id: int, data: Dict[str, Any]) -> Optional[GradeRecord]:
        row = self._read("grades.get", lambda: self.db.get(GradeModel, grade_id))
        if row is None:
            return None

        def apply():
            for key, value in data.items():
                setattr(row, key, value)

        self._write("grades.update", apply)
        self.db.refresh(row)
        return GradeRecord.model_validate(row)

    def update_grades_for_student(self, student_id: int, data: Dict[str, Any]) -> int:
        return self._write(
            "grades.update_for_student",
            lambda: self.db.query(GradeModel)
            .filter(GradeModel.student_id == student_id)
            .update(data, synchronize_session=False),
        )

    def delete_grades_for_student(self, student_id: int) -> int:
        return self._write(
            "grades.delete_for_student",
            lambda: self.db.query(GradeModel)
            .filter(GradeModel.student_id == student_id)
            .delete(synchronize_session=False),
        )
