from datetime import datetime

from fastapi.testclient import TestClient

from note_gen.api.app import create_app
from note_gen.config import Settings
from note_gen.providers.llm.client import GenerationFailure, GenerationSuccess
from note_gen.service.generator import NoteService
from note_gen.workflow.generation import NoteWorkflow


class _StubClient:
    def __init__(self, result) -> None:
        self.result = result
        self.prompts: list[str] = []

    async def generate(self, prompt: str):
        self.prompts.append(prompt)
        return self.result


def _make_client(result=None) -> tuple[TestClient, _StubClient]:
    stub = _StubClient(result or GenerationSuccess("stub text"))
    service = NoteService(NoteWorkflow(stub))  # type: ignore[arg-type]
    settings = Settings(CLAUDE_API_KEY="test-key")
    return TestClient(create_app(settings=settings, service=service)), stub


def test_health() -> None:
    client, _ = _make_client()

    resp = client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["message"] == "Note Generation API is running"
    datetime.fromisoformat(data["timestamp"])


def test_generate_book_note_end_to_end() -> None:
    client, stub = _make_client()

    resp = client.post(
        "/api/generate-note",
        json={"rawText": "Create a book note for The Pragmatic Programmer", "noteKind": "book"},
    )

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "content": "stub text", "noteKind": "book"}
    assert len(stub.prompts) == 1
    assert 'Book title: "The Pragmatic Programmer"' in stub.prompts[0]


def test_generate_accepts_legacy_field_names() -> None:
    client, stub = _make_client()

    resp = client.post("/api/generate-note", json={"content": "Tell me about Sapiens", "noteType": "book"})

    assert resp.status_code == 200
    assert resp.json()["noteKind"] == "book"
    assert 'Book title: "Sapiens"' in stub.prompts[0]


def test_unsupported_kind_is_client_error_without_generation() -> None:
    client, stub = _make_client()

    resp = client.post("/api/generate-note", json={"rawText": "anything", "noteKind": "decision-log"})

    assert resp.status_code == 400
    data = resp.json()
    assert data["success"] is False
    assert data["error"]
    assert stub.prompts == []


def test_missing_fields_are_client_errors() -> None:
    client, stub = _make_client()

    missing_kind = client.post("/api/generate-note", json={"rawText": "Create a book note for Dune"})
    empty_text = client.post("/api/generate-note", json={"rawText": "", "noteKind": "book"})
    blank_text = client.post("/api/generate-note", json={"rawText": "   ", "noteKind": "book"})

    for resp in (missing_kind, empty_text, blank_text):
        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert resp.json()["error"]
    assert stub.prompts == []


def test_generation_failure_is_server_error() -> None:
    client, _ = _make_client(GenerationFailure("Upstream generation request failed"))

    resp = client.post("/api/generate-note", json={"rawText": "Create a book note for Dune", "noteKind": "book"})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Upstream generation request failed"}


def test_test_generation_endpoint() -> None:
    client, stub = _make_client(GenerationSuccess("a haiku"))

    resp = client.post("/api/test-generation")

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "content": "a haiku"}
    assert stub.prompts == ["Write a haiku about backend development"]


def test_test_generation_endpoint_reports_failure_in_body() -> None:
    client, _ = _make_client(GenerationFailure("Generation service is not configured"))

    resp = client.post("/api/test-generation")

    assert resp.status_code == 200
    assert resp.json()["success"] is False
