from pydantic import BaseModel
from typing import List


# ✅ subject grade summary (screen modal, print view, PDF header)
class GradeReport(BaseModel):
    total: int = 0                           # number of students in the view
    passed: int = 0                          # remark == Passed
    failed: int = 0                          # remark == Failed
    avg_overall: float = 0                   # mean of per-student averages
    failed_students: List[str] = []          # names with a failing remark
