# schemas/tutor.py
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel

# ---------- Transcript ----------


class MessageStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    failed = "failed"


class ChatMessage(BaseModel):
    sender: Literal["user", "bot"]
    text: str
    status: MessageStatus = MessageStatus.confirmed


class RequestStatus(str, Enum):
    idle = "idle"
    in_flight = "in_flight"
    succeeded = "succeeded"
    failed = "failed"


class RequestState(BaseModel):
    status: RequestStatus = RequestStatus.idle
    # set only when status == failed
    reason: Optional[str] = None


# ---------- Upstream reply ----------


class TutorReply(BaseModel):
    msg: str
    session_id: Optional[str] = None


# ---------- Requests / views ----------


class SendMessageRequest(BaseModel):
    text: str


class PointerEvent(BaseModel):
    inside_panel: bool


class TutorStateOut(BaseModel):
    is_open: bool
    busy: bool
    request: RequestState
    session_id: Optional[str] = None
    messages: List[ChatMessage]
    # index of the newest message; the panel keeps it in view
    scroll_to: Optional[int] = None
