from typing import Iterable

from schemas.grades import GradeView
from schemas.reports import GradeReport
from services.grade_calculator import FAILED, PASSED, compute_average


def assemble_report(views: Iterable[GradeView]) -> GradeReport:
    """Summarize one subject's grade view: counts by remark and the overall average."""
    views = list(views)
    total = len(views)
    passed = sum(1 for v in views if v.remark == PASSED)
    failed = [v.name for v in views if v.remark == FAILED]

    averages = [compute_average(v.prelim, v.midterm, v.semifinal, v.final) for v in views]
    avg_overall = round(sum(averages) / total, 2) if total else 0

    return GradeReport(
        total=total,
        passed=passed,
        failed=len(failed),
        avg_overall=avg_overall,
        failed_students=failed,
    )
