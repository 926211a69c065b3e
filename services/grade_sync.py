"""
services/grade_sync.py

Keeps grade records in step with the student roster.

- every student gets exactly one grade record per subject (blank until saved)
- the student_name copy on grade records follows student edits
- deleting a student deletes that student's grade records

Grade records are matched to students by student_id; student_name is only a
display copy.
"""

import logging
from typing import Dict, Iterable, List, Optional

from schemas.grades import (
    BatchSaveResult,
    EnsureResult,
    GradeCreate,
    GradeRecord,
    GradeView,
)
from schemas.students import Student
from services.grade_calculator import NOT_GRADED, compute_derived, parse_score
from services.record_store import RecordStore
from utils.errors import NotFound, StoreFailure

logger = logging.getLogger(__name__)


def full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


def blank_grade(student_id: int, student_name: str, subject: Optional[str] = None,
                subject_id: Optional[int] = None) -> GradeCreate:
    return GradeCreate(
        student_id=student_id,
        student_name=student_name,
        subject=subject,
        subject_id=subject_id,
        prelim=0,
        midterm=0,
        semifinal=0,
        final=0,
        average=0,
        remark=NOT_GRADED,
    )


class GradeSyncService:
    def __init__(self, store: RecordStore):
        self.store = store

    def _subject_id(self, subject_name: str) -> Optional[int]:
        try:
            subject = self.store.find_subject_by_name(subject_name)
        except StoreFailure as e:
            logger.error(f"subject lookup failed for '{subject_name}': {e}")
            return None
        return subject.id if subject else None

    # ==========================================================
    # [grade view]
    # ==========================================================

    # ✅ one blank record for every roster student missing one for this subject
    def ensure_grade_records_for_subject(self, subject_name: str, roster: Iterable[Student]) -> EnsureResult:
        result = EnsureResult(subject=subject_name)
        subject_id = self._subject_id(subject_name)

        for student in roster:
            try:
                _, created = self.store.insert_grade_if_absent(
                    blank_grade(student.id, student.full_name, subject_name, subject_id)
                )
            except StoreFailure as e:
                logger.error(f"insert error for {student.full_name} ({subject_name}): {e}")
                result.failed.append(student.id)
                continue
            if created:
                logger.info(f"created blank grade for {student.full_name} ({subject_name})")
                result.created.append(student.id)

        return result

    # ✅ roster + this subject's grade records, one row per student
    def load_grade_view(self, subject_name: str) -> List[GradeView]:
        try:
            roster = self.store.list_students()
        except StoreFailure as e:
            logger.error(f"error fetching students: {e}")
            return []

        self.ensure_grade_records_for_subject(subject_name, roster)

        try:
            records = self.store.find_grades(subject=subject_name)
        except StoreFailure as e:
            logger.error(f"error fetching grades for {subject_name}: {e}")
            records = []

        by_student: Dict[int, GradeRecord] = {}
        for record in records:
            by_student.setdefault(record.student_id, record)

        views = []
        for student in roster:
            grade = by_student.get(student.id)
            if grade is None:
                views.append(GradeView(id=student.id, name=student.full_name))
                continue
            views.append(
                GradeView(
                    id=student.id,
                    name=student.full_name,
                    prelim=grade.prelim,
                    midterm=grade.midterm,
                    semifinal=grade.semifinal,
                    final=grade.final,
                    average=compute_derived(grade.prelim, grade.midterm, grade.semifinal, grade.final).average,
                    remark=grade.remark or NOT_GRADED,
                )
            )
        return views

    # ==========================================================
    # [save]
    # ==========================================================

    # ✅ recompute derived fields, then update the (student, subject) record or insert it
    def save_grade(self, view: GradeView, subject_name: str) -> GradeRecord:
        # the name copy always comes from the student record
        student = self.store.get_student(view.id)
        if student is None:
            raise NotFound("student", view.id)

        scores = {
            "prelim": parse_score(view.prelim),
            "midterm": parse_score(view.midterm),
            "semifinal": parse_score(view.semifinal),
            "final": parse_score(view.final),
        }
        derived = compute_derived(**scores)
        data = {
            "student_id": student.id,
            "student_name": student.full_name,
            "subject": subject_name,
            **scores,
            "average": derived.average,
            "remark": derived.remark,
        }

        existing = self.store.find_grade(student.id, subject_name)
        if existing is None:
            record, created = self.store.insert_grade_if_absent(
                GradeCreate(subject_id=self._subject_id(subject_name), **data)
            )
            if created:
                return record
            existing = record

        updated = self.store.update_grade(existing.id, data)
        if updated is None:
            raise StoreFailure("grades.update", f"grade {existing.id} disappeared during save")
        return updated

    # ✅ one save per student; a failure is collected, the rest still run
    def save_grades(self, views: Iterable[GradeView], subject_name: str) -> BatchSaveResult:
        result = BatchSaveResult(subject=subject_name)
        for view in views:
            try:
                result.saved.append(self.save_grade(view, subject_name))
            except (StoreFailure, NotFound) as e:
                logger.error(f"error saving grade for {view.name} ({subject_name}): {e}")
                result.failed.append(view.name)
        if result.ok:
            logger.info(f"saved {len(result.saved)} grades for {subject_name}")
        return result

    # ==========================================================
    # [student lifecycle hooks]
    # ==========================================================

    # ✅ new student -> one blank grade record, subject unset
    def on_student_created(self, student: Student) -> GradeRecord:
        return self.store.insert_grade(blank_grade(student.id, student.full_name))

    # ✅ renamed student -> rewrite the name copy on every grade record
    def on_student_updated(self, student_id: int, first_name: str, last_name: str) -> int:
        count = self.store.update_grades_for_student(
            student_id, {"student_name": full_name(first_name, last_name)}
        )
        logger.info(f"renamed {count} grade records of student {student_id}")
        return count

    # ✅ deleted student -> delete that student's grade records
    def on_student_deleted(self, student_id: int) -> int:
        count = self.store.delete_grades_for_student(student_id)
        logger.info(f"deleted {count} grade records of student {student_id}")
        return count
