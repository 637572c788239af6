# tutor_client.py
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from schemas.tutor import TutorReply

logger = logging.getLogger("quiz-tutor.tutor_client")

ANSWER_FIELD = "r_usuario"
QUERY_FIELD = "consulta_usuario"


class TutorError(Exception):
    """The tutor call did not produce a usable reply."""


class TutorResponseError(TutorError):
    """HTTP 200, but the body is not ``{"msg": str, "session_id"?: str}``."""


def build_payload(context: Dict[str, Any], answer: str, query: str) -> Dict[str, Any]:
    # question fields first so the two user fields always win on a name clash
    return {**context, ANSWER_FIELD: answer, QUERY_FIELD: query}


class TutorClient:
    def __init__(self, client: httpx.AsyncClient, url: str):
        self.client = client
        self.url = url

    async def ask(self, payload: Dict[str, Any]) -> TutorReply:
        try:
            response = await self.client.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TutorError(f"request_failed: {type(e).__name__}: {e}") from e

        logger.debug("Tutor replied with HTTP %s", response.status_code)
        if response.status_code != 200:
            raise TutorError(f"http_status: {response.status_code}")

        try:
            return TutorReply.model_validate(response.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic's ValidationError are both ValueErrors
            kind = "shape_error" if isinstance(e, ValidationError) else "invalid_json"
            raise TutorResponseError(kind) from e
