import os
import sys
import unittest
from dataclasses import replace
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

# Keep API tests deterministic: no AI provider, no rate limiting.
os.environ.setdefault("AI_PROVIDER", "none")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from docx import Document  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from limits import parse as parse_limit  # noqa: E402
from pypdf import PdfWriter  # noqa: E402

from fakes import FailingAIClient, FakeAIClient  # noqa: E402

from app.ai.factory import get_ai_client  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.rate_limit import limiter  # noqa: E402
from app.interview.question_bank import QUESTION_BANK  # noqa: E402
from app.main import app  # noqa: E402
from app.parsing.models import DOCX_MIME, PDF_MIME  # noqa: E402


def docx_bytes(*paragraphs: str) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class InterviewApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)
        cls.resume = docx_bytes(
            "John Smith",
            "Contact: john.smith@example.com, (555) 123-4567",
            "Full stack engineer building React and Node.js services.",
        )

    def setUp(self):
        app.dependency_overrides[get_ai_client] = lambda: None

    def tearDown(self):
        app.dependency_overrides.clear()

    def _upload(self, content: bytes, content_type: str = DOCX_MIME, filename: str = "resume.docx"):
        return self.client.post("/api/interview/upload", files={"resume": (filename, content, content_type)})

    def test_root_and_health(self):
        root = self.client.get("/")
        self.assertEqual(root.status_code, 200)
        self.assertIn("upload", root.json()["endpoints"])

        health = self.client.get("/api/interview/health")
        self.assertEqual(health.status_code, 200)
        body = health.json()
        self.assertEqual(body["status"], "OK")
        self.assertIn("timestamp", body)
        self.assertEqual(body["endpoints"]["summary"], "POST /api/interview/summary")

    def test_unknown_route_returns_not_found_message(self):
        response = self.client.get("/api/interview/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"error": "Not Found", "message": "Cannot GET /api/interview/missing"},
        )

    def test_upload_extracts_contact_details(self):
        response = self._upload(self.resume)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(
            body["data"],
            {"name": "John Smith", "email": "john.smith@example.com", "phone": "(555) 123-4567"},
        )
        self.assertEqual(body["extractionMethod"], "regex")
        self.assertTrue(body["resumeText"].startswith("John Smith"))

    def test_upload_preview_is_truncated(self):
        long_resume = docx_bytes("Jane Doe", "x" * 2000)
        body = self._upload(long_resume).json()
        self.assertEqual(len(body["resumeText"]), settings.resume_preview_chars)

    def test_upload_requires_a_file(self):
        response = self.client.post("/api/interview/upload")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "No file uploaded")
        self.assertFalse(response.json()["success"])

    def test_upload_rejects_unsupported_type(self):
        response = self._upload(b"plain text resume", content_type="text/plain", filename="resume.txt")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid file type")

    def test_upload_rejects_legacy_word(self):
        response = self._upload(b"\xd0\xcf\x11\xe0", content_type="application/msword", filename="resume.doc")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid file format. Only PDF and DOCX are allowed.")

    def test_upload_reports_unreadable_file(self):
        response = self._upload(b"garbage bytes", content_type=PDF_MIME, filename="resume.pdf")
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Could not read file. File may be corrupted or password protected.")
        self.assertIn("details", body)

    def test_upload_without_text_is_rejected(self):
        response = self._upload(blank_pdf_bytes(), content_type=PDF_MIME, filename="scan.pdf")
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["error"].startswith("Could not extract text from resume"))

    def test_upload_size_limit(self):
        with patch("app.api.v1.interview.settings", replace(settings, max_upload_bytes=1024 * 1024)):
            response = self._upload(b"%PDF-" + b"0" * (1024 * 1024 + 1), content_type=PDF_MIME, filename="big.pdf")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "File too large", "message": "Maximum file size is 1MB"})

    def test_question_rotates_through_bank(self):
        response = self.client.post("/api/interview/question", json={"difficulty": "easy", "questionNumber": 7})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["question"], QUESTION_BANK["easy"][1])
        self.assertEqual(body["difficulty"], "easy")
        self.assertEqual(body["source"], "bank")

    def test_question_rejects_unknown_difficulty(self):
        response = self.client.post("/api/interview/question", json={"difficulty": "expert", "questionNumber": 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid difficulty level")

    def test_question_number_error_names_the_right_field(self):
        response = self.client.post("/api/interview/question", json={"difficulty": "easy", "questionNumber": -1})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Invalid request")
        self.assertIn("questionNumber", body["message"])

    def test_evaluate_scores_heuristically(self):
        answer = "React hooks like useState manage component state and props flow down from parents"
        response = self.client.post(
            "/api/interview/evaluate",
            json={"question": "What are hooks?", "answer": answer, "difficulty": "easy"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body, {"success": True, "score": 8, "maxScore": 10, "method": "heuristic"})

    def test_evaluate_empty_answer_scores_zero(self):
        response = self.client.post(
            "/api/interview/evaluate",
            json={"question": "What are hooks?", "answer": "", "difficulty": "hard"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["score"], 0)

    def test_evaluate_requires_fields(self):
        response = self.client.post("/api/interview/evaluate", json={"question": "What are hooks?", "difficulty": "easy"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Missing required fields: question, answer, difficulty")

    def test_evaluate_rejects_unknown_difficulty(self):
        response = self.client.post(
            "/api/interview/evaluate",
            json={"question": "Q", "answer": "A", "difficulty": "impossible"},
        )
        self.assertEqual(response.status_code, 400)

    def test_summary_contract(self):
        payload = {
            "candidateData": {
                "name": "Jane Doe",
                "answers": [
                    {"difficulty": "easy", "score": 5},
                    {"difficulty": "medium", "score": 5},
                    {"difficulty": "hard", "score": 5},
                ],
            }
        }
        response = self.client.post("/api/interview/summary", json=payload)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["averageScore"], 50.0)
        self.assertEqual(body["percentage"], 50)
        self.assertEqual(body["totalQuestions"], 3)
        self.assertTrue(body["summary"].startswith("Jane Doe scored 50% overall (Easy: 5.0/10"))

    def test_summary_rejects_missing_or_empty_answers(self):
        for payload in ({}, {"candidateData": {"name": "Jane"}}, {"candidateData": {"name": "Jane", "answers": []}}):
            with self.subTest(payload=payload):
                response = self.client.post("/api/interview/summary", json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "Invalid candidate data")

    def test_summary_rejects_out_of_range_scores(self):
        payload = {"candidateData": {"answers": [{"difficulty": "easy", "score": 11}]}}
        response = self.client.post("/api/interview/summary", json=payload)
        self.assertEqual(response.status_code, 400)


class InterviewApiWithAITests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _use(self, client) -> None:
        app.dependency_overrides[get_ai_client] = lambda: client

    def test_ai_contact_fields_are_filled_from_regex(self):
        self._use(FakeAIClient('{"name": "Johnny Smith", "email": "john.smith@example.com", "phone": null}'))
        content = docx_bytes("John Smith", "Contact: john.smith@example.com, (555) 123-4567")
        response = self.client.post("/api/interview/upload", files={"resume": ("cv.docx", content, DOCX_MIME)})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["data"]["name"], "Johnny Smith")
        self.assertEqual(body["data"]["phone"], "(555) 123-4567")
        self.assertEqual(body["extractionMethod"], "ai+regex")

    def test_ai_question_is_used_when_available(self):
        self._use(FakeAIClient("Explain event loop phases in Node.js."))
        response = self.client.post("/api/interview/question", json={"difficulty": "hard", "questionNumber": 2})
        self.assertEqual(response.json()["question"], "Explain event loop phases in Node.js.")
        self.assertEqual(response.json()["source"], "ai")

    def test_ai_score_is_used_when_available(self):
        self._use(FakeAIClient("7"))
        response = self.client.post(
            "/api/interview/evaluate",
            json={"question": "What is REST?", "answer": "An architectural style", "difficulty": "medium"},
        )
        self.assertEqual(response.json()["score"], 7)
        self.assertEqual(response.json()["method"], "ai")

    def test_provider_failure_falls_back_to_heuristics(self):
        failing = FailingAIClient()
        self._use(failing)
        question = self.client.post("/api/interview/question", json={"difficulty": "medium", "questionNumber": 0})
        self.assertEqual(question.json()["question"], QUESTION_BANK["medium"][0])

        evaluated = self.client.post(
            "/api/interview/evaluate",
            json={"question": "Q", "answer": "short answer", "difficulty": "medium"},
        )
        self.assertEqual(evaluated.json(), {"success": True, "score": 2, "maxScore": 10, "method": "heuristic"})
        self.assertEqual(failing.calls, 2)

    def test_ai_summary_text_keeps_deterministic_statistics(self):
        self._use(FakeAIClient("Jane is a strong candidate."))
        payload = {"candidateData": {"name": "Jane", "answers": [{"difficulty": "easy", "score": 9}]}}
        body = self.client.post("/api/interview/summary", json=payload).json()
        self.assertEqual(body["summary"], "Jane is a strong candidate.")
        self.assertEqual(body["averageScore"], 90.0)
        self.assertEqual(body["totalQuestions"], 1)


class RateLimitTests(unittest.TestCase):
    def setUp(self):
        app.dependency_overrides[get_ai_client] = lambda: None
        self.client = TestClient(app)
        self._was_enabled = limiter.enabled
        limiter.enabled = True
        limiter.reset()

    def tearDown(self):
        limiter.enabled = self._was_enabled
        limiter.reset()
        app.dependency_overrides.clear()

    def _ask(self, headers=None):
        return self.client.post("/api/interview/question", json={"difficulty": "easy"}, headers=headers or {})

    def test_limit_applies_per_client(self):
        allowed = parse_limit(settings.rate_limit).amount
        statuses = [self._ask().status_code for _ in range(allowed + 1)]
        self.assertEqual(statuses[:allowed], [200] * allowed)
        self.assertEqual(statuses[-1], 429)

    def test_forwarded_for_header_does_not_reset_the_limit(self):
        allowed = parse_limit(settings.rate_limit).amount
        statuses = [
            self._ask({"X-Forwarded-For": f"10.0.{i // 256}.{i % 256}"}).status_code
            for i in range(allowed + 1)
        ]
        self.assertEqual(statuses[:allowed], [200] * allowed)
        self.assertEqual(statuses[-1], 429)


if __name__ == "__main__":
    unittest.main()
