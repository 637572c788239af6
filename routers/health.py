# routers/health.py
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from deps.session import get_navigator, get_tutor
from navigator import QuizNavigator
from tutor import TutorSession

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/sources")
async def health_sources(
    request: Request,
    nav: Annotated[QuizNavigator, Depends(get_navigator)],
    tutor: Annotated[TutorSession, Depends(get_tutor)],
):
    settings = request.app.state.settings
    return {
        "ok": nav.ready,
        "questions": {
            "url": settings.questions_url,
            "status": nav.status,
            "error": nav.error,
            "count": nav.total,
        },
        "tutor": {
            "url": settings.tutor_url,
            "request": tutor.request.status.value,
            "session_id": tutor.session_id,
        },
    }
