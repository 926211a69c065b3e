from sqlalchemy import Column, Float, ForeignKey, Integer, String, UniqueConstraint
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # per-subject grade record of one student

    id = Column(Integer, primary_key=True, index=True)                     # grade ID (Primary Key)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)  # student ID
    student_name = Column(String(200), nullable=False)                     # display copy of the student's full name
    subject = Column(String(100), index=True)                              # subject name (NULL for the record created with a new student)
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="SET NULL"))  # subject ID when the name resolves

    prelim = Column(Float, nullable=False, default=0)                      # prelim score
    midterm = Column(Float, nullable=False, default=0)                     # midterm score
    semifinal = Column(Float, nullable=False, default=0)                   # semifinal score
    final = Column(Float, nullable=False, default=0)                       # final score
    average = Column(Float, nullable=False, default=0)                     # mean of the four scores
    remark = Column(String(20), nullable=False, default="Not Graded")      # Not Graded / Passed / Failed

    # ✅ one grade record per (student, subject)
    __table_args__ = (
        UniqueConstraint("student_id", "subject", name="uq_grades_student_subject"),
    )
