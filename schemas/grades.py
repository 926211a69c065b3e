from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional

from services.grade_calculator import NOT_GRADED, parse_score


# ✅ stored grade record (what the record store returns)
class GradeRecord(BaseModel):
    id: int                                  # grade ID
    student_id: int                          # student ID
    student_name: str                        # display copy of the student's full name
    subject: Optional[str] = None            # subject name
    subject_id: Optional[int] = None         # subject ID when known
    prelim: float = 0
    midterm: float = 0
    semifinal: float = 0
    final: float = 0
    average: float = 0
    remark: str = NOT_GRADED                 # Not Graded / Passed / Failed

    model_config = ConfigDict(from_attributes=True)


# ✅ insert payload (no ID yet)
class GradeCreate(BaseModel):
    student_id: int
    student_name: str
    subject: Optional[str] = None
    subject_id: Optional[int] = None
    prelim: float = 0
    midterm: float = 0
    semifinal: float = 0
    final: float = 0
    average: float = 0
    remark: str = NOT_GRADED


# ✅ one row of a subject's grade table (screen / print / PDF)
class GradeView(BaseModel):
    id: int                                  # student ID
    name: str                                # student full name
    prelim: float = 0
    midterm: float = 0
    semifinal: float = 0
    final: float = 0
    average: float = 0
    remark: str = NOT_GRADED

    # table inputs may arrive as "" or "3.5"
    @field_validator("prelim", "midterm", "semifinal", "final", "average", mode="before")
    @classmethod
    def _parse_score(cls, v: Any) -> float:
        return parse_score(v)


class GradeSaveRequest(BaseModel):
    subject: str = Field(..., min_length=1)
    grades: List[GradeView]

    @field_validator("subject", mode="before")
    @classmethod
    def _strip_subject(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


# ✅ result of ensure_grade_records_for_subject
class EnsureResult(BaseModel):
    subject: str
    created: List[int] = []                  # student IDs that received a blank record
    failed: List[int] = []                   # student IDs whose insert failed


# ✅ result of a batch save
class BatchSaveResult(BaseModel):
    subject: str
    saved: List[GradeRecord] = []
    failed: List[str] = []                   # names of the students whose save failed

    @property
    def ok(self) -> bool:
        return not self.failed
