# bank.py
"""
Question source access.

The source is fetched once per mount and its body is parsed into either
``Ok(questions)`` or ``Err(reason)``; nothing downstream touches raw JSON.
"""

from __future__ import annotations

from typing import Any, Tuple, Union

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from schemas.questions import Question, QuestionSetIn


class Ok(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: Tuple[Question, ...]


class Err(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: str


FetchResult = Union[Ok, Err]


def parse_question_set(payload: Any) -> FetchResult:
    try:
        envelope = QuestionSetIn.model_validate(payload)
    except ValidationError as e:
        return Err(reason=f"shape_error: {e.error_count()} error(s) in question set envelope")

    if not envelope.preguntas:
        return Err(reason="shape_error: question set is empty")

    questions = []
    for pos, raw in enumerate(envelope.preguntas):
        try:
            questions.append(Question.from_raw(raw, pos))
        except ValidationError as e:
            # one bad question poisons the set; a partial quiz would renumber the rest
            return Err(reason=f"shape_error: question {pos}: {e.error_count()} error(s)")
    return Ok(questions=tuple(questions))


async def fetch_question_set(client: httpx.AsyncClient, url: str) -> FetchResult:
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        return Err(reason=f"fetch_failed: {type(e).__name__}: {e}")

    if response.status_code != 200:
        return Err(reason=f"http_status: {response.status_code}")

    try:
        payload = response.json()
    except ValueError:
        return Err(reason="invalid_json")

    return parse_question_set(payload)
