# routers/tutor.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends

from deps.session import get_navigator, get_tutor, get_tutor_client
from navigator import QuizNavigator, QuizNotReady
from schemas.tutor import PointerEvent, SendMessageRequest, TutorStateOut
from tutor import TutorSession
from tutor_client import TutorClient

router = APIRouter(prefix="/tutor", tags=["tutor"])

Tutor = Annotated[TutorSession, Depends(get_tutor)]


@router.get("", response_model=TutorStateOut)
async def tutor_state(tutor: Tutor):
    return tutor.view()


@router.post("/open", response_model=TutorStateOut)
async def open_panel(tutor: Tutor):
    tutor.open()
    return tutor.view()


@router.post("/close", response_model=TutorStateOut)
async def close_panel(tutor: Tutor):
    tutor.close()
    return tutor.view()


@router.post("/pointer")
async def pointer_down(event: PointerEvent, tutor: Tutor):
    closed = tutor.pointer_down(event.inside_panel)
    return {"ok": True, "closed": closed, "state": tutor.view()}


@router.post("/reset", response_model=TutorStateOut)
async def reset_conversation(tutor: Tutor):
    tutor.reset()
    return tutor.view()


@router.post("/messages")
async def send_message(
    req: SendMessageRequest,
    background_tasks: BackgroundTasks,
    tutor: Tutor,
    nav: Annotated[QuizNavigator, Depends(get_navigator)],
    client: Annotated[TutorClient, Depends(get_tutor_client)],
):
    """
    Appends the user message right away and answers; the tutor call itself
    completes after the response is sent. Poll ``GET /tutor`` for the reply.
    """
    try:
        context, answer = nav.tutor_context()
    except QuizNotReady as e:
        return {"ok": False, "error": str(e), "state": tutor.view()}

    was_busy = tutor.busy
    pending = tutor.begin_send(req.text, context, answer)
    if pending is None:
        error = "request in flight" if was_busy else "empty message"
        return {"ok": False, "error": error, "state": tutor.view()}

    background_tasks.add_task(tutor.complete_send, pending, client)
    return {"ok": True, "state": tutor.view()}
