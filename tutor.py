# tutor.py
"""
Tutor panel state: visibility, the append-only transcript, the backend
session id and the state of the single request that may be in flight.

A send is split in two so the HTTP layer can answer before the tutor does:
``begin_send`` runs synchronously (validation, optimistic user message,
in-flight state) and ``complete_send`` awaits the tutor and settles the state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from schemas.tutor import (
    ChatMessage,
    MessageStatus,
    RequestState,
    RequestStatus,
    TutorReply,
    TutorStateOut,
)
from tutor_client import TutorClient, TutorError, build_payload

logger = logging.getLogger("quiz-tutor.tutor")


class PendingSend(BaseModel):
    generation: int
    message_index: int
    payload: Dict[str, Any]


class TutorSession:
    def __init__(self) -> None:
        self.is_open = False
        self.messages: List[ChatMessage] = []
        self.session_id: Optional[str] = None
        self.request = RequestState()
        # bumped per send and per reset; completions from an older generation are dropped
        self._generation = 0
        # generation of the call still on the wire, even if reset() superseded it
        self._outstanding: Optional[int] = None

    # --- panel --------------------------------------------------------------------

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        # an in-flight send keeps running
        self.is_open = False

    def pointer_down(self, inside_panel: bool) -> bool:
        """Outside-click dismissal. Returns True if the panel was closed."""
        if self.is_open and not inside_panel:
            self.close()
            return True
        return False

    # --- conversation -------------------------------------------------------------

    @property
    def busy(self) -> bool:
        return self._outstanding is not None

    @property
    def scroll_to(self) -> Optional[int]:
        return len(self.messages) - 1 if self.messages else None

    def reset(self) -> None:
        """New conversation. A call already on the wire keeps the control busy until it settles."""
        self._generation += 1
        self.messages = []
        self.session_id = None
        self.request = RequestState()

    def begin_send(self, text: str, context: Dict[str, Any], answer: str) -> Optional[PendingSend]:
        query = (text or "").strip()
        if not query:
            logger.debug("Dropping blank tutor message")
            return None
        if self.busy:
            logger.debug("Dropping tutor message while a request is in flight")
            return None

        self.messages.append(ChatMessage(sender="user", text=query, status=MessageStatus.pending))
        self._generation += 1
        self.request = RequestState(status=RequestStatus.in_flight)
        self._outstanding = self._generation
        return PendingSend(
            generation=self._generation,
            message_index=len(self.messages) - 1,
            payload=build_payload(context, answer, query),
        )

    async def complete_send(self, pending: PendingSend, client: TutorClient) -> bool:
        """Await the tutor for ``pending``. Returns True if a bot message was appended."""
        reply: Optional[TutorReply] = None
        reason: Optional[str] = None
        try:
            reply = await client.ask(pending.payload)
        except TutorError as e:
            reason = str(e)
        except Exception as e:
            logger.exception("Unexpected error while querying the tutor")
            reason = f"unexpected: {type(e).__name__}"
        finally:
            if self._outstanding == pending.generation:
                self._outstanding = None
            stale = pending.generation != self._generation
            if not stale and reply is None and reason is None:
                # cancelled underneath us; never leave the control disabled
                self.messages[pending.message_index].status = MessageStatus.failed
                self.request = RequestState(status=RequestStatus.failed, reason="cancelled")

        if stale:
            logger.info("Discarding tutor reply for a superseded conversation")
            return False

        if reply is None:
            logger.warning("Tutor request failed: %s", reason)
            self.messages[pending.message_index].status = MessageStatus.failed
            self.request = RequestState(status=RequestStatus.failed, reason=reason)
            return False

        self.messages[pending.message_index].status = MessageStatus.confirmed
        self.messages.append(ChatMessage(sender="bot", text=reply.msg))
        if reply.session_id and self.session_id is None:
            self.session_id = reply.session_id
            logger.info("Tutor session started: %s", reply.session_id)
        self.request = RequestState(status=RequestStatus.succeeded)
        return True

    async def send_message(
        self, text: str, context: Dict[str, Any], answer: str, client: TutorClient
    ) -> Optional[bool]:
        """Returns None when the message was dropped, else whether the tutor replied."""
        pending = self.begin_send(text, context, answer)
        if pending is None:
            return None
        return await self.complete_send(pending, client)

    # --- view ---------------------------------------------------------------------

    def view(self) -> TutorStateOut:
        return TutorStateOut(
            is_open=self.is_open,
            busy=self.busy,
            request=self.request,
            session_id=self.session_id,
            messages=list(self.messages),
            scroll_to=self.scroll_to,
        )
