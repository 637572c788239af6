import json
from typing import Callable, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

QUESTIONS_URL = "https://questions.test/"
TUTOR_URL = "https://tutor.test/ai-tutor/"

# Same shape the question source serves, mixing the key spellings it uses.
SAMPLE_PAYLOAD = {
    "preguntas": [
        {
            "id": 0,
            "pregunta": "¿Cuánto es 2 + 2?",
            "tema": "aritmética",
            "opciones": [{"id": 0, "texto": "3"}, {"id": 1, "texto": "4"}],
        },
        {
            "pregunta": "¿Qué planeta es el más grande?",
            "opciones": ["Marte", "Júpiter", "Venus"],
        },
        {
            "id": "q3",
            "prompt": "Pick the prime",
            "options": [{"id": 10, "label": "9"}, {"id": 11, "label": "7"}],
        },
    ]
}


class FakeUpstream:
    """Serves the question source and the tutor endpoint, recording tutor calls."""

    def __init__(
        self,
        questions: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        tutor: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ):
        self.questions = questions or (lambda request: httpx.Response(200, json=SAMPLE_PAYLOAD))
        self.tutor = tutor or (lambda request: httpx.Response(200, json={"msg": "hello"}))
        self.tutor_calls: List[dict] = []
        self.question_calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url == QUESTIONS_URL:
            self.question_calls += 1
            return self.questions(request)
        if url == TUTOR_URL:
            self.tutor_calls.append(json.loads(request.content))
            return self.tutor(request)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_client(upstream: FakeUpstream) -> TestClient:
    settings = Settings(
        questions_url=QUESTIONS_URL,
        tutor_url=TUTOR_URL,
        await_initial_load=True,
    )
    return TestClient(create_app(settings, transport=upstream.transport))


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(upstream):
    with make_client(upstream) as c:
        yield c
