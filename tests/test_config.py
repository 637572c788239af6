import logging

from config import DEFAULT_CORS_ORIGINS, DEFAULT_QUESTIONS_URL, Settings


def test_defaults(monkeypatch):
    for name in ("QUESTIONS_URL", "TUTOR_URL", "HTTP_TIMEOUT_S", "CORS_ORIGINS", "AWAIT_INITIAL_LOAD"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()
    assert s.questions_url == DEFAULT_QUESTIONS_URL
    assert s.http_timeout_s is None
    assert s.cors_origins == DEFAULT_CORS_ORIGINS
    assert s.await_initial_load is False


def test_from_env(monkeypatch):
    monkeypatch.setenv("QUESTIONS_URL", "http://q.local/")
    monkeypatch.setenv("TUTOR_URL", "http://t.local/ai-tutor/")
    monkeypatch.setenv("HTTP_TIMEOUT_S", "2.5")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("AWAIT_INITIAL_LOAD", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.questions_url == "http://q.local/"
    assert s.tutor_url == "http://t.local/ai-tutor/"
    assert s.http_timeout_s == 2.5
    assert s.cors_origins == ["https://a.example", "https://b.example"]
    assert s.await_initial_load is True
    assert s.log_level == "DEBUG"


def test_bad_numbers_fall_back(monkeypatch, caplog):
    monkeypatch.setenv("HTTP_TIMEOUT_S", "soon")
    monkeypatch.setenv("PORT", "eighty")
    with caplog.at_level(logging.WARNING, logger="quiz-tutor.config"):
        s = Settings.from_env()
    assert s.http_timeout_s is None
    assert s.port == 8000
    assert "HTTP_TIMEOUT_S" in caplog.text
    assert "PORT" in caplog.text
