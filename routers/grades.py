from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse, Response

from dependencies.store import get_grade_sync, get_pdf_service
from schemas.grades import GradeSaveRequest
from services.grade_sync import GradeSyncService
from services.pdf_service import PDFService
from services.report_assembler import assemble_report
from utils.errors import ValidationFailure

router = APIRouter(prefix="/grades", tags=["grades"])


# subject names are matched without surrounding spaces; blank is a missing field
def subject_query(subject: str = Query(..., description="subject name, e.g. Mathematics")) -> str:
    subject = subject.strip()
    if not subject:
        raise ValidationFailure(["subject"])
    return subject


# ==========================================================
# [1] grade table
# ==========================================================

# ✅ [VIEW] every student's row for one subject (missing records are created)
@router.get("/view")
def read_grade_view(subject: str = Depends(subject_query), sync: GradeSyncService = Depends(get_grade_sync)):
    views = sync.load_grade_view(subject)
    return {
        "success": True,
        "data": {"subject": subject, "grades": [v.model_dump() for v in views]},
        "message": f"{subject} grades loaded",
    }


# ✅ [SAVE] "Save Grades": one upsert per row
@router.post("/save")
def save_grades(body: GradeSaveRequest, sync: GradeSyncService = Depends(get_grade_sync)):
    result = sync.save_grades(body.grades, body.subject)
    data = {
        "subject": result.subject,
        "saved": [r.model_dump() for r in result.saved],
        "failed": result.failed,
    }
    if not result.ok:
        return JSONResponse(
            status_code=502,
            content={
                "success": False,
                "data": data,
                "error": {"code": "STORE_FAILURE", "message": "Failed to save grades"},
            },
        )
    return {"success": True, "data": data, "message": "Grades saved successfully"}


# ==========================================================
# [2] report
# ==========================================================

# ✅ [REPORT] pass/fail summary
@router.get("/report")
def read_grade_report(subject: str = Depends(subject_query), sync: GradeSyncService = Depends(get_grade_sync)):
    views = sync.load_grade_view(subject)
    report = assemble_report(views)
    return {
        "success": True,
        "data": {"subject": subject, **report.model_dump()},
        "message": f"{subject} report generated",
    }


# ✅ [PRINT] printable HTML page
@router.get("/report/print", response_class=HTMLResponse)
def print_grade_report(
    subject: str = Depends(subject_query),
    sync: GradeSyncService = Depends(get_grade_sync),
    pdf: PDFService = Depends(get_pdf_service),
):
    views = sync.load_grade_view(subject)
    return HTMLResponse(pdf.render_grade_report_html(subject, views, assemble_report(views)))


# ✅ [PDF] grade report download
@router.get("/report/pdf")
def export_grade_report(
    subject: str = Depends(subject_query),
    sync: GradeSyncService = Depends(get_grade_sync),
    pdf: PDFService = Depends(get_pdf_service),
):
    views = sync.load_grade_view(subject)
    content = pdf.generate_grade_report_pdf(subject, views, assemble_report(views))
    filename = quote(f"{subject}_Grades_Report.pdf")
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{filename}"},
    )
