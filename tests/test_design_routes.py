"""
Integration tests for the design assistant and saved designs endpoints
"""
import pytest

from errors import RateLimited


@pytest.mark.asyncio
async def test_chat_creates_design_session(api_client, session_store, stub_client):
    stub_client.default = "اختر ألواناً هادئة"

    response = await api_client.post("/api/chat", json={"studentId": "stu-1", "message": "أريد شعار"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {"response": "اختر ألواناً هادئة", "mode": "design"}
    assert len(session_store.get("stu-1").chat) == 2


@pytest.mark.asyncio
async def test_chat_fallback_when_rate_limited(api_client, stub_client, recording_sleep):
    stub_client.default = RateLimited

    response = await api_client.post("/api/chat", json={"studentId": "stu-2", "message": "أحتاج شعار"})

    assert response.status_code == 200
    assert "تصميم الشعار" in response.json()["data"]["response"]
    assert stub_client.calls == 3
    assert recording_sleep.waits == [2.0, 4.0]


@pytest.mark.asyncio
async def test_chat_requires_message(api_client):
    response = await api_client.post("/api/chat", json={"studentId": "stu-3"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_design_suggestions(api_client, stub_client):
    stub_client.default = "ثلاثة اتجاهات"

    response = await api_client.post(
        "/api/design/suggestions",
        json={"studentId": "stu-4", "projectType": "مخبز"}
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"suggestions": "ثلاثة اتجاهات", "projectType": "مخبز"}
    assert "مخبز" in stub_client.prompts[0]


@pytest.mark.asyncio
async def test_save_and_list_designs_newest_first(api_client):
    first = await api_client.post(
        "/api/design/save",
        json={"studentId": "stu-5", "designType": "logo", "designData": "{\"color\": \"blue\"}"}
    )
    second = await api_client.post("/api/design/save", json={"studentId": "stu-5", "designType": "website"})
    await api_client.post("/api/design/save", json={"studentId": "other", "designType": "cover"})

    assert first.status_code == 200
    assert second.status_code == 200

    response = await api_client.get("/api/designs/stu-5")
    designs = response.json()["data"]["designs"]

    assert [d["design_type"] for d in designs] == ["website", "logo"]
    assert designs[0]["design_data"] == ""


@pytest.mark.asyncio
async def test_save_design_requires_type(api_client):
    response = await api_client.post("/api/design/save", json={"studentId": "stu-6"})
    assert response.status_code == 400
