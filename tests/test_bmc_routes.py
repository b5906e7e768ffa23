"""
Integration tests for the BMC session endpoints
"""
import pytest

from config.bmc_sections import BMC_SECTIONS, TOTAL_SECTIONS
from errors import UpstreamError
from services.design_service import DESIGN_WELCOME_MESSAGE
from services.summary_service import INSUFFICIENT_DATA_NOTICE


@pytest.mark.asyncio
async def test_full_questionnaire_walkthrough(api_client, stub_client):
    """start -> next -> answer -> next -> summary, with the provider down"""
    stub_client.default = UpstreamError

    start = await api_client.post("/api/start", json={"studentId": "stu-1"})
    assert start.status_code == 200
    assert start.json()["data"]["totalSections"] == TOTAL_SECTIONS

    first = await api_client.post("/api/next", json={"studentId": "stu-1"})
    assert first.status_code == 200
    assert first.json()["data"]["question"] == BMC_SECTIONS[0].fallback_question
    assert first.json()["data"]["progress"] == 0

    answer = await api_client.post("/api/answer", json={"studentId": "stu-1", "answer": "X"})
    assert answer.status_code == 200
    assert answer.json()["data"]["progress"] == 1

    second = await api_client.post("/api/next", json={"studentId": "stu-1"})
    assert second.json()["data"]["question"] == BMC_SECTIONS[1].fallback_question

    summary = await api_client.post("/api/summary", json={"studentId": "stu-1"})
    assert summary.status_code == 200
    data = summary.json()["data"]
    assert data["bmcData"] == {"partners": "X"}
    assert "X" in data["summary"]


@pytest.mark.asyncio
async def test_summary_without_answers(api_client, stub_client):
    await api_client.post("/api/start", json={"studentId": "stu-2"})

    response = await api_client.post("/api/summary", json={"studentId": "stu-2"})

    assert response.json()["data"]["summary"] == INSUFFICIENT_DATA_NOTICE
    assert stub_client.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("path,payload", [
    ("/api/next", {"studentId": "ghost"}),
    ("/api/answer", {"studentId": "ghost", "answer": "x"}),
    ("/api/summary", {"studentId": "ghost"}),
])
async def test_unknown_session_is_404(api_client, path, payload):
    response = await api_client.post(path, json=payload)

    assert response.status_code == 404
    assert response.json()["error"] == "session_not_found"


@pytest.mark.asyncio
async def test_missing_student_id_is_400(api_client):
    response = await api_client.post("/api/start", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_history_of_unknown_session_is_empty(api_client):
    response = await api_client.get("/api/chat/history/nobody")

    assert response.status_code == 200
    assert response.json()["data"] == {"history": []}


@pytest.mark.asyncio
async def test_history_reflects_session(api_client, stub_client):
    stub_client.default = "ما هي شراكاتك؟"
    await api_client.post("/api/start", json={"studentId": "stu-3"})
    await api_client.post("/api/next", json={"studentId": "stu-3"})
    await api_client.post("/api/answer", json={"studentId": "stu-3", "answer": "مورد محلي"})

    data = (await api_client.get("/api/chat/history/stu-3")).json()["data"]

    assert [m["role"] for m in data["history"]] == ["assistant", "user"]
    assert data["mode"] == "bmc"
    assert data["bmcProgress"] == 1
    assert data["bmcData"] == {"partners": "مورد محلي"}


@pytest.mark.asyncio
async def test_mode_switch_greets_in_design_mode(api_client, session_store):
    response = await api_client.post("/api/mode/switch", json={"studentId": "stu-4", "mode": "design"})

    assert response.status_code == 200
    assert response.json()["data"]["mode"] == "design"
    assert session_store.get("stu-4").chat[0].content == DESIGN_WELCOME_MESSAGE


@pytest.mark.asyncio
async def test_mode_switch_rejects_unknown_mode(api_client):
    response = await api_client.post("/api/mode/switch", json={"studentId": "stu-5", "mode": "music"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_health_reports_active_sessions(api_client):
    before = (await api_client.get("/api/health")).json()["data"]
    await api_client.post("/api/start", json={"studentId": "stu-6"})

    response = await api_client.get("/api/health")

    assert response.status_code == 200
    data = response.json()["data"]
    assert before["activeSessions"] == 0
    assert data["activeSessions"] == 1
    assert data["aiConfigured"] is False
