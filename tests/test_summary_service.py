"""
Unit tests for the canvas summary generator
"""
import json

import pytest

from errors import InsufficientData, SessionNotFound, UpstreamError, RateLimited
from services.summary_service import (
    CLOSING_TIP,
    INSUFFICIENT_DATA_NOTICE,
    SummaryService,
    build_summary_prompt,
)


@pytest.fixture
def summaries(session_store, retry_policy):
    return SummaryService(session_store, retry_policy)


@pytest.mark.asyncio
async def test_empty_answers_return_notice_without_network(summaries, session_store, stub_client):
    session_store.start("s1")

    summary = await summaries.final_summary("s1")

    assert summary == INSUFFICIENT_DATA_NOTICE
    assert stub_client.calls == 0


@pytest.mark.asyncio
async def test_fallback_keeps_answers_in_insertion_order(summaries, session_store, stub_client):
    session = session_store.start("s1")
    session.answers["partners"] = "X"
    session.answers["costs"] = "Y"
    stub_client.default = RateLimited

    summary = await summaries.final_summary("s1")

    assert "X" in summary and "Y" in summary
    assert summary.index("X") < summary.index("Y")
    assert summary.endswith(CLOSING_TIP)
    assert stub_client.calls <= 3


@pytest.mark.asyncio
async def test_fallback_after_upstream_error_uses_single_call(summaries, session_store, stub_client):
    session = session_store.start("s1")
    session.answers["costs"] = "رواتب"
    session.answers["partners"] = "موردون"
    stub_client.default = UpstreamError

    summary = await summaries.final_summary("s1")

    assert stub_client.calls == 1
    assert summary.index("رواتب") < summary.index("موردون")
    assert "هيكل التكاليف" in summary


@pytest.mark.asyncio
async def test_generated_summary_is_returned(summaries, session_store, stub_client):
    session = session_store.start("s1")
    session.answers["value"] = "توصيل سريع"
    stub_client.default = "ملخص جاهز"

    assert await summaries.final_summary("s1") == "ملخص جاهز"
    assert "توصيل سريع" in stub_client.prompts[0]


@pytest.mark.asyncio
async def test_unknown_session_raises(summaries):
    with pytest.raises(SessionNotFound):
        await summaries.final_summary("ghost")


def test_prompt_embeds_answers_as_json():
    prompt = build_summary_prompt({"partners": "X", "costs": "Y"})
    assert json.dumps({"partners": "X", "costs": "Y"}, ensure_ascii=False, indent=2) in prompt


def test_prompt_requires_answers():
    with pytest.raises(InsufficientData):
        build_summary_prompt({})
