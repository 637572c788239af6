import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bank import fetch_question_set
from config import Settings
from navigator import QuizNavigator

# Routers
from routers.health import router as health_router
from routers.quiz import router as quiz_router
from routers.tutor import router as tutor_router
from tutor import TutorSession
from tutor_client import TutorClient

logger = logging.getLogger("quiz-tutor")


def log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Background task %s failed", task.get_name(), exc_info=exc)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # mount: fresh session state and exactly one question fetch
        client = httpx.AsyncClient(timeout=settings.http_timeout_s, transport=transport)
        navigator = QuizNavigator()
        app.state.navigator = navigator
        app.state.tutor = TutorSession()
        app.state.tutor_client = TutorClient(client, settings.tutor_url)

        load = navigator.load_questions(lambda: fetch_question_set(client, settings.questions_url))
        if settings.await_initial_load:
            await load
            app.state.load_task = None
        else:
            app.state.load_task = asyncio.create_task(load, name="load-questions")
            app.state.load_task.add_done_callback(log_task_failure)

        try:
            yield
        finally:
            # unmount: drop everything, including a fetch still in progress
            task = app.state.load_task
            if task is not None and not task.done():
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task
            await client.aclose()
            logger.info("Quiz session closed")

    app = FastAPI(title="Quiz Tutor Client", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def health_root():
        return {"ok": True}

    app.include_router(quiz_router)  # /quiz/...
    app.include_router(tutor_router)  # /tutor/...
    app.include_router(health_router)  # /health/...
    return app


_settings = Settings.from_env()
logging.basicConfig(level=_settings.log_level)

app = create_app(_settings)


def run() -> None:
    uvicorn.run(app, host=_settings.host, port=_settings.port, log_level=_settings.log_level.lower())


if __name__ == "__main__":
    run()
