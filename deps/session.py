from fastapi import Request

from navigator import QuizNavigator
from tutor import TutorSession
from tutor_client import TutorClient

# One quiz session per process; the lifespan in main.py puts these on app.state.


def get_navigator(request: Request) -> QuizNavigator:
    return request.app.state.navigator


def get_tutor(request: Request) -> TutorSession:
    return request.app.state.tutor


def get_tutor_client(request: Request) -> TutorClient:
    return request.app.state.tutor_client
