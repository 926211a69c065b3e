from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from config.settings import settings
from schemas.grades import GradeView
from schemas.reports import GradeReport
from services.grade_calculator import format_score

# fixed column order of the printed / exported grade table
REPORT_COLUMNS = ["Student", "Prelim", "Midterm", "Semifinal", "Final", "Average", "Remark"]


class PDFService:
    def __init__(self, template_dir: Optional[str] = None):
        # template environment
        self.template_dir = Path(template_dir or settings.TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["score"] = format_score

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """Render a template to HTML."""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """Convert HTML to PDF."""
        # imported here: WeasyPrint loads Pango/Cairo system libraries on import
        import weasyprint

        return weasyprint.HTML(string=html_content, base_url=str(self.template_dir)).write_pdf()

    def _grade_report_data(self, subject: str, views: List[GradeView], report: GradeReport) -> Dict[str, Any]:
        return {
            "subject": subject,
            "columns": REPORT_COLUMNS,
            "grades": views,
            "report": report,
            "generated_date": date.today().isoformat(),
        }

    def render_grade_report_html(self, subject: str, views: List[GradeView], report: GradeReport) -> str:
        """Printable grade report page."""
        return self._render_template("grade_report.html", self._grade_report_data(subject, views, report))

    def generate_grade_report_pdf(self, subject: str, views: List[GradeView], report: GradeReport) -> bytes:
        """Grade report PDF."""
        html = self.render_grade_report_html(subject, views, report)
        return self._html_to_pdf(html)
