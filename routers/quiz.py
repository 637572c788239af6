# routers/quiz.py
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from deps.session import get_navigator
from navigator import QuizNavigator, QuizNotReady
from schemas.questions import QuizStateOut, SelectRequest

router = APIRouter(prefix="/quiz", tags=["quiz"])

Navigator = Annotated[QuizNavigator, Depends(get_navigator)]

# Handlers are async so every state change runs on the event loop thread.


@router.get("", response_model=QuizStateOut)
async def quiz_state(nav: Navigator):
    return nav.view()


@router.post("/select")
async def select_option(req: SelectRequest, nav: Navigator):
    try:
        # only the visible question can be answered
        nav.select_option(nav.index, req.option_id)
    except (QuizNotReady, ValueError) as e:
        return {"ok": False, "error": str(e)}
    return {"ok": True, "state": nav.view()}


@router.post("/submit")
async def submit_answer(nav: Navigator):
    try:
        nav.submit_answer()
    except QuizNotReady as e:
        return {"ok": False, "error": str(e)}
    return {"ok": True, "state": nav.view()}


@router.post("/next")
async def next_question(nav: Navigator):
    try:
        was_submitted = nav.submitted
        advanced = nav.advance()
    except QuizNotReady as e:
        return {"ok": False, "error": str(e)}

    if not advanced:
        error = "answer not submitted" if not was_submitted else "already at last question"
        return {"ok": False, "error": error, "state": nav.view()}
    return {"ok": True, "state": nav.view()}
