import asyncio
import logging
from contextlib import suppress

import httpx

import main
from conftest import FakeUpstream, make_client


def test_run_serves_app_with_configured_address(monkeypatch):
    seen = {}

    def fake_run(app, **kwargs):
        seen["app"] = app
        seen.update(kwargs)

    monkeypatch.setattr(main.uvicorn, "run", fake_run)
    main.run()
    assert seen["app"] is main.app
    assert seen["host"] == main._settings.host
    assert seen["port"] == main._settings.port


def test_log_task_failure_reports_exception(caplog):
    async def boom():
        raise httpx.InvalidURL("bad url")

    async def run():
        task = asyncio.create_task(boom(), name="load-questions")
        with suppress(httpx.InvalidURL):
            await task
        return task

    task = asyncio.run(run())
    with caplog.at_level(logging.ERROR, logger="quiz-tutor"):
        main.log_task_failure(task)
    assert "load-questions failed" in caplog.text


def test_crashing_question_fetch_marks_load_failed():
    def crash(request):
        raise RuntimeError("bad url")

    upstream = FakeUpstream(questions=crash)
    with make_client(upstream) as client:
        body = client.get("/quiz").json()
    assert body["status"] == "failed"
    assert body["error"] == "unexpected: RuntimeError: bad url"
