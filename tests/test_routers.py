"""
HTTP API: students, subjects, grades
"""

from unittest.mock import patch

from services.pdf_service import PDFService


def _add_student(client, first_name, last_name, number):
    response = client.post("/v1/students/", json={
        "first_name": first_name, "last_name": last_name,
        "student_number": number, "year_level": 1, "course": "BSIT",
    })
    assert response.status_code == 200
    return response.json()["data"]


class TestStudentsAPI:

    def test_crud(self, client):
        alice = _add_student(client, "Alice", "Tan", "2024-0001")
        assert alice["full_name"] == "Alice Tan"

        listed = client.get("/v1/students/").json()["data"]
        assert [s["id"] for s in listed] == [alice["id"]]

        response = client.put(f"/v1/students/{alice['id']}", json={
            "first_name": "Alicia", "last_name": "Tan", "student_number": "2024-0001", "year_level": 2,
        })
        assert response.json()["data"]["full_name"] == "Alicia Tan"

        assert client.delete(f"/v1/students/{alice['id']}").json()["success"] is True
        assert client.get(f"/v1/students/{alice['id']}").status_code == 404

    def test_validation_failure(self, client):
        response = client.post("/v1/students/", json={"first_name": "Alice", "last_name": ""})
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["missing_fields"] == ["last_name", "student_number"]

    def test_year_level_range(self, client):
        response = client.post("/v1/students/", json={
            "first_name": "A", "last_name": "B", "student_number": "1", "year_level": 5,
        })
        assert response.status_code == 422

    def test_latency_header(self, client):
        assert "x-latency-ms" in client.get("/health").headers


class TestSubjectsAPI:

    def test_crud_and_choices(self, client):
        response = client.post("/v1/subjects/", json={
            "subject_code": "DB101", "subject_name": "Database Systems", "instructor": "Mr. Lim",
        })
        subject = response.json()["data"]
        assert subject["created_at"]

        assert client.get("/v1/subjects/choices").json()["data"] == ["Database Systems"]
        assert client.get(f"/v1/subjects/{subject['id']}").json()["data"]["instructor"] == "Mr. Lim"

        response = client.put(f"/v1/subjects/{subject['id']}", json={
            "subject_code": "DB101", "subject_name": "Database Systems", "instructor": "Ms. Go",
        })
        assert response.json()["data"]["instructor"] == "Ms. Go"
        assert client.delete(f"/v1/subjects/{subject['id']}").status_code == 200
        assert client.delete(f"/v1/subjects/{subject['id']}").status_code == 404

    def test_missing_fields(self, client):
        response = client.post("/v1/subjects/", json={"subject_code": "X"})
        assert response.status_code == 422
        assert response.json()["error"]["missing_fields"] == ["subject_name", "instructor"]


class TestGradesAPI:

    def _seed(self, client):
        alice = _add_student(client, "Alice", "Tan", "2024-0001")
        bob = _add_student(client, "Bob", "Cruz", "2024-0002")
        return alice, bob

    def test_view_save_report(self, client):
        alice, bob = self._seed(client)

        view = client.get("/v1/grades/view", params={"subject": "Mathematics"}).json()["data"]
        assert [g["name"] for g in view["grades"]] == ["Alice Tan", "Bob Cruz"]
        assert {g["remark"] for g in view["grades"]} == {"Not Graded"}

        response = client.post("/v1/grades/save", json={
            "subject": "Mathematics",
            "grades": [
                {"id": alice["id"], "name": "Alice Tan", "prelim": "5", "midterm": 3, "semifinal": 3, "final": 3},
                {"id": bob["id"], "name": "Bob Cruz", "prelim": 2, "midterm": 2, "semifinal": 2, "final": 2},
            ],
        })
        assert response.status_code == 200
        assert [g["remark"] for g in response.json()["data"]["saved"]] == ["Failed", "Passed"]

        report = client.get("/v1/grades/report", params={"subject": "Mathematics"}).json()["data"]
        assert report == {
            "subject": "Mathematics",
            "total": 2,
            "passed": 1,
            "failed": 1,
            "avg_overall": 2.75,
            "failed_students": ["Alice Tan"],
        }

    def test_deleted_student_leaves_view(self, client):
        alice, bob = self._seed(client)
        client.get("/v1/grades/view", params={"subject": "Science"})
        client.delete(f"/v1/students/{alice['id']}")

        view = client.get("/v1/grades/view", params={"subject": "Science"}).json()["data"]
        assert [g["id"] for g in view["grades"]] == [bob["id"]]

    def test_subject_is_required(self, client):
        assert client.get("/v1/grades/view").status_code == 422

    def test_blank_subject_rejected(self, client):
        self._seed(client)

        response = client.get("/v1/grades/view", params={"subject": "   "})
        assert response.status_code == 422
        assert response.json()["error"]["missing_fields"] == ["subject"]
        assert client.get("/v1/grades/report", params={"subject": ""}).status_code == 422

        response = client.post("/v1/grades/save", json={"subject": "  ", "grades": []})
        assert response.status_code == 422

    def test_subject_spaces_are_ignored(self, client):
        alice, bob = self._seed(client)
        client.get("/v1/grades/view", params={"subject": "Mathematics"})

        response = client.post("/v1/grades/save", json={
            "subject": "Mathematics ",
            "grades": [
                {"id": alice["id"], "name": "Alice Tan", "prelim": 2, "midterm": 2, "semifinal": 2, "final": 2},
            ],
        })
        assert response.status_code == 200
        assert response.json()["data"]["subject"] == "Mathematics"

        view = client.get("/v1/grades/view", params={"subject": " Mathematics"}).json()["data"]
        assert view["subject"] == "Mathematics"
        assert len(view["grades"]) == 2
        assert view["grades"][0]["prelim"] == 2

        report = client.get("/v1/grades/report", params={"subject": "Mathematics"}).json()["data"]
        assert report["total"] == 2
        assert report["passed"] == 1

    def test_print_view(self, client):
        self._seed(client)
        response = client.get("/v1/grades/report/print", params={"subject": "English"})
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "English - Student Grades Report" in response.text
        assert "Bob Cruz" in response.text

    def test_pdf_export(self, client):
        self._seed(client)
        with patch.object(PDFService, "_html_to_pdf", return_value=b"%PDF-1.7 test") as to_pdf:
            response = client.get("/v1/grades/report/pdf", params={"subject": "English"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "English_Grades_Report.pdf" in response.headers["content-disposition"]
        assert response.content == b"%PDF-1.7 test"
        assert "Alice Tan" in to_pdf.call_args.args[0]
