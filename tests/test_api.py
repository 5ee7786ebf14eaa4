"""
HTTP-level tests for the FastAPI app (model calls are faked via dependency overrides).
"""

import pytest
from fastapi.testclient import TestClient

from promptform.generation import ChatAssistant, ScriptGenerator
from promptform.main import app
from promptform.routers.deps import get_chat_assistant, get_generator


@pytest.fixture
def api():
	with TestClient(app) as client:
		yield client
	app.dependency_overrides.clear()


@pytest.fixture
def use_generator(fake_client_factory):
	def _install(*replies):
		client = fake_client_factory(*replies)
		app.dependency_overrides[get_generator] = lambda: ScriptGenerator(client)
		return client
	return _install


def _doc_json(doc):
	return doc.model_dump(by_alias=True, mode="json")


class TestMeta:

	def test_health(self, api):
		assert api.get("/health").json() == {"status": "ok"}

	def test_request_id_header(self, api):
		response = api.get("/health", headers={"X-Request-ID": "abc123"})

		assert response.headers["X-Request-ID"] == "abc123"

	def test_options(self, api):
		data = api.get("/script/options").json()

		assert "Questionnaire (feature prioritization, perception)" in data["research_types"]
		assert data["tone_adjustments"] == ["Formal", "Conversational", "Friendly"]


class TestScriptEndpoints:

	def test_generate(self, api, use_generator, script_json):
		use_generator(script_json())

		response = api.post("/script/generate", json={"parameters": {"researchType": "Generative Interview", "productInfo": "A todo app"}})

		assert response.status_code == 200
		body = response.json()
		assert body["followUps"][0]["id"] == "f1"
		assert body["isQuestionnaire"] is False
		assert body["opening"][0]["type"] is None

	def test_generate_malformed(self, api, use_generator):
		use_generator('{"opening": []}')

		response = api.post("/script/generate", json={"parameters": {}})

		assert response.status_code == 502
		assert "malformed" in response.json()["detail"]

	def test_generate_unavailable(self, api, use_generator, unavailable_error):
		use_generator(unavailable_error)

		response = api.post("/script/generate", json={"parameters": {}})

		assert response.status_code == 502
		assert response.json()["detail"].startswith("Failed to generate content")

	def test_generate_without_key(self, api, monkeypatch):
		from promptform import gemini_client

		monkeypatch.setattr(gemini_client.settings, "gemini_api_key", None)

		response = api.post("/script/generate", json={"parameters": {}})

		assert response.status_code == 503

	def test_refine(self, api, use_generator, script_json, interview_doc):
		client = use_generator(script_json())

		response = api.post("/script/refine", json={
			"parameters": {},
			"document": _doc_json(interview_doc),
			"instruction": "Add probes",
		})

		assert response.status_code == 200
		assert '"Add probes"' in client.json_calls[0]["parts"][0]["text"]

	def test_refine_requires_instruction(self, api, use_generator, interview_doc):
		use_generator()

		response = api.post("/script/refine", json={"parameters": {}, "document": _doc_json(interview_doc), "instruction": " "})

		assert response.status_code == 400

	def test_tone(self, api, use_generator, script_json):
		client = use_generator(script_json())

		response = api.post("/script/tone", json={"parameters": {"tone": "Formal"}, "tone": "Conversational"})

		assert response.status_code == 200
		assert "- Desired Tone: Conversational" in client.json_calls[0]["parts"][0]["text"]

	def test_tone_rejects_unknown(self, api, use_generator):
		use_generator()

		assert api.post("/script/tone", json={"parameters": {}, "tone": "Sarcastic"}).status_code == 400

	def test_edit_core_question(self, api, questionnaire_doc):
		response = api.post("/script/edit", json={
			"document": _doc_json(questionnaire_doc),
			"group": "core",
			"questionId": "q2",
			"text": "Tell us about it",
			"sectionIndex": 0,
		})

		assert response.status_code == 200
		assert response.json()["core"][0]["questions"][1]["text"] == "Tell us about it"

	def test_edit_unknown_question(self, api, interview_doc):
		response = api.post("/script/edit", json={
			"document": _doc_json(interview_doc),
			"group": "opening",
			"questionId": "zzz",
			"text": "x",
		})

		assert response.status_code == 404


class TestExportEndpoints:

	def test_text(self, api, interview_doc):
		response = api.post("/export/text", json={"document": _doc_json(interview_doc)})

		assert response.status_code == 200
		assert response.headers["content-type"].startswith("text/plain")
		assert "## Core Questions: Pain Points" in response.text

	def test_survey(self, api, questionnaire_doc):
		response = api.post("/export/survey", json={"document": _doc_json(questionnaire_doc)})

		assert response.status_code == 200
		assert 'filename="survey.txt"' in response.headers["content-disposition"]
		assert "[[MultipleAnswer]]" in response.text

	def test_survey_requires_questionnaire(self, api, interview_doc):
		assert api.post("/export/survey", json={"document": _doc_json(interview_doc)}).status_code == 400

	def test_pdf(self, api, questionnaire_doc):
		response = api.post("/export/pdf", json={"document": _doc_json(questionnaire_doc)})

		assert response.status_code == 200
		assert response.headers["content-type"] == "application/pdf"
		assert 'filename="generated_script.pdf"' in response.headers["content-disposition"]
		assert response.content.startswith(b"%PDF")

	def test_duplicate_ids_rejected(self, api):
		doc = {"opening": [{"id": "a", "text": "1"}], "closing": [{"id": "a", "text": "2"}]}

		assert api.post("/export/text", json={"document": doc}).status_code == 422


class TestAttachmentEndpoint:

	def test_upload_png(self, api, sample_png):
		response = api.post("/attachments", files={"file": ("home.png", sample_png, "image/png")})

		assert response.status_code == 200
		assert response.json()["mimeType"] == "image/png"

	def test_upload_garbage(self, api):
		response = api.post("/attachments", files={"file": ("notes.txt", b"hello", "text/plain")})

		assert response.status_code == 400


class TestChatEndpoints:

	def test_session_and_message(self, api, fake_client_factory):
		assistant = ChatAssistant(lambda: fake_client_factory("Use open questions."))
		app.dependency_overrides[get_chat_assistant] = lambda: assistant

		session = api.post("/chat/session").json()
		response = api.post("/chat/message", json={"session_id": session["session_id"], "text": "Tips?"})

		assert response.status_code == 200
		assert response.json()["messages"][-1] == {"role": "model", "text": "Use open questions."}
		assert "history" not in response.json()

	def test_unknown_session(self, api):
		response = api.post("/chat/message", json={"session_id": "missing", "text": "hi"})

		assert response.status_code == 404
