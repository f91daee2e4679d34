import os
import sys
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.api.v1 import resumes as resumes_api  # noqa: E402
from resume_coach.core import events  # noqa: E402
from resume_coach.main import app  # noqa: E402
from resume_coach.services import feedback_service, tailor_service  # noqa: E402
from resume_coach.services.llm import ResumeAIError  # noqa: E402
from resume_coach.storage.kv_store import close_store  # noqa: E402
from resume_coach.utils.sse import sse  # noqa: E402

RESUME = (
    "Header\n"
    "John Doe\n"
    "Software Engineer\n"
    "john@x.com | 555-123-4567\n"
    "EXPERIENCE\n"
    "Acme Corp | Lead Dev\n"
    "- Did a thing"
)

FEEDBACK = {
    "overallScore": 72,
    "ATS": {"score": 80, "tips": [{"type": "good", "tip": "Clear headings"}]},
    "toneAndStyle": {"score": 65, "tips": []},
    "content": {"score": 70, "tips": [{"type": "improve", "tip": "Add metrics", "explanation": "Numbers help."}]},
    "structure": {"score": 75, "tips": []},
    "skills": {"score": 60, "tips": []},
}


class ResumeCoachApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._env = patch.dict(os.environ, {"KV_DB_PATH": str(Path(self._tmp.name) / "kv.db")})
        self._env.start()

    def tearDown(self):
        close_store()
        self._env.stop()
        self._tmp.cleanup()

    def _create(self, text=RESUME):
        response = self.client.post("/v1/resumes", json={"resume_text": text, "job_title": "Lead Dev"})
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_health_and_models(self):
        self.assertEqual(self.client.get("/v1/health").json()["status"], "healthy")
        body = self.client.get("/v1/models").json()
        ids = [model["id"] for model in body["models"]]
        self.assertEqual(len(ids), 5)
        self.assertIn("gpt-4o-mini", ids)

    def test_resume_crud(self):
        created = self._create()
        self.assertEqual(created["resume_text"].split("\n")[1], "John Doe")

        fetched = self.client.get(f"/v1/resumes/{created['id']}")
        self.assertEqual(fetched.status_code, 200)
        listed = self.client.get("/v1/resumes").json()
        self.assertEqual([item["id"] for item in listed], [created["id"]])

        self.assertEqual(self.client.delete(f"/v1/resumes/{created['id']}").status_code, 204)
        self.assertEqual(self.client.get(f"/v1/resumes/{created['id']}").status_code, 404)

    def test_upload_txt_and_rejections(self):
        response = self.client.post(
            "/v1/resumes/upload",
            files={"file": ("jane.txt", b"Jane Roe\n\n\nEngineer\nPage 1 of 1", "text/plain")},
            data={"company_name": "Acme"},
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["resume_text"], "Jane Roe\nEngineer")
        self.assertEqual(response.json()["company_name"], "Acme")

        bad_type = self.client.post(
            "/v1/resumes/upload",
            files={"file": ("jane.exe", b"MZ", "application/octet-stream")},
        )
        self.assertEqual(bad_type.status_code, 400)

        with patch.object(resumes_api, "settings", SimpleNamespace(max_upload_mb=0)):
            too_big = self.client.post(
                "/v1/resumes/upload",
                files={"file": ("jane.txt", b"Jane Roe", "text/plain")},
            )
        self.assertEqual(too_big.status_code, 413)

    def test_export_pdf_and_docx(self):
        pdf = self.client.post("/v1/export/pdf", json={"resume_text": RESUME})
        self.assertEqual(pdf.status_code, 200)
        self.assertEqual(pdf.headers["content-type"], "application/pdf")
        self.assertIn('filename="John_Doe.pdf"', pdf.headers["content-disposition"])
        self.assertTrue(pdf.content.startswith(b"%PDF"))

        created = self._create()
        docx = self.client.post("/v1/export/docx", json={"resume_id": created["id"]})
        self.assertEqual(docx.status_code, 200)
        self.assertIn('filename="John_Doe.docx"', docx.headers["content-disposition"])
        self.assertTrue(docx.content.startswith(b"PK"))

        self.assertEqual(self.client.post("/v1/export/pdf", json={}).status_code, 422)
        self.assertEqual(self.client.post("/v1/export/pdf", json={"resume_id": "missing"}).status_code, 404)

    def test_layout_preview(self):
        response = self.client.post("/v1/export/layout", json={"resume_text": RESUME})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "John Doe")
        self.assertEqual(body["sections"], ["EXPERIENCE"])
        self.assertEqual(
            [line["role"] for line in body["lines"]],
            [
                "name",
                "job_title_heading",
                "contact_info",
                "section_header",
                "experience_entry_heading",
                "bullet",
            ],
        )

    def test_analyze_stores_feedback(self):
        created = self._create()
        with patch.object(feedback_service, "complete_json_required", return_value=FEEDBACK):
            response = self.client.post(f"/v1/resumes/{created['id']}/analyze", json={})
        self.assertEqual(response.status_code, 200)
        feedback = response.json()["feedback"]
        self.assertEqual(feedback["overallScore"], 72)
        self.assertEqual(feedback["ATS"]["tips"][0]["type"], "good")
        self.assertEqual(self.client.get("/v1/resumes").json()[0]["overall_score"], 72)

    def test_ai_failures_map_to_503_and_missing_to_404(self):
        created = self._create()
        with patch.object(
            feedback_service,
            "complete_json_required",
            side_effect=ResumeAIError("AI is disabled", code="llm_disabled"),
        ):
            response = self.client.post(f"/v1/resumes/{created['id']}/analyze", json={})
        self.assertEqual(response.status_code, 503)
        self.assertEqual(self.client.post("/v1/resumes/missing/analyze", json={}).status_code, 404)

    def test_tailor_stream_emits_progress_result_done(self):
        created = self._create()

        def fake_json(*, task, **kwargs):
            if task == "analyze_job":
                return {"keywords": ["Python"]}
            return {"overall": 88}

        with patch.object(tailor_service, "complete_json", side_effect=fake_json), patch.object(
            tailor_service, "complete_text", return_value="tailored"
        ):
            response = self.client.post(
                "/v1/tailor/stream",
                json={
                    "resume_id": created["id"],
                    "job": {"company_name": "Acme", "job_title": "Lead Dev", "job_description": "Python"},
                },
            )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("text/event-stream"))
        body = response.text
        self.assertIn("event: connected", body)
        self.assertIn('"message": "Analyzing job requirements..."', body)
        self.assertIn("Overall fit score: 88%", body)
        self.assertTrue(body.startswith(sse(events.CONNECTED, '{"ok": true}')))
        self.assertTrue(body.rstrip().endswith("data: {}"))
        self.assertTrue(body.endswith(sse(events.DONE, "{}")))

        tailored = self.client.get(f"/v1/resumes/{created['id']}/tailored").json()
        self.assertEqual(len(tailored["results"]), 1)

    def test_tailor_rejects_unknown_model_and_missing_resume(self):
        job = {"job_description": "Python"}
        bad_model = self.client.post("/v1/job-fit", json={"resume_text": RESUME, "job": job, "model": "gpt-2"})
        self.assertEqual(bad_model.status_code, 400)
        missing = self.client.post("/v1/tailor/stream", json={"resume_id": "missing", "job": job})
        self.assertEqual(missing.status_code, 404)
        no_resume = self.client.post("/v1/job-fit", json={"job": job})
        self.assertEqual(no_resume.status_code, 422)

    def test_chat_history_and_quick_actions(self):
        created = self._create()
        history = self.client.get(f"/v1/resumes/{created['id']}/chat").json()
        self.assertEqual(history["messages"][0]["role"], "assistant")
        self.assertEqual(self.client.delete(f"/v1/resumes/{created['id']}/chat").status_code, 204)

        actions = self.client.get("/v1/chat/quick-actions").json()
        self.assertEqual(len(actions), 6)
        self.assertEqual(
            self.client.post("/v1/resumes/missing/chat/stream", json={"message": "hi"}).status_code,
            404,
        )


if __name__ == "__main__":
    unittest.main()
