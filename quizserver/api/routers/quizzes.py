import logging
from typing import Annotated, Callable, List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ...core.config import settings
from ...core.errors import QuizDecodeError, QuizNotFoundError, QuizServerError
from ...core.templates import templates
from ...domain.codec import encode_quiz
from ...domain.model import QuizSummary
from ...repositories.factory import build_repository
from ...schemas.quiz_schemas import QuizListItem
from ...services.quiz_service import QuizService

router = APIRouter(tags=["quizzes"])
logger = logging.getLogger(__name__)

# Dependency factories

def get_service() -> QuizService:
    return QuizService(build_repository(settings))

ServiceDep = Annotated[QuizService, Depends(get_service)]


# /create renders a static form on GET; the repository is built only for POST
def get_service_provider() -> Callable[[], QuizService]:
    return get_service

ServiceProviderDep = Annotated[Callable[[], QuizService], Depends(get_service_provider)]


async def read_body(request: Request) -> bytes:
    if request.method != "POST":
        return b""
    return await request.body()

BodyDep = Annotated[bytes, Depends(read_body)]


def _list_summaries(svc: QuizService) -> List[QuizSummary]:
    try:
        return svc.list_quizzes()
    except QuizServerError as e:
        logger.error("Failed to list quizzes: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list quizzes: {e}",
        )


@router.api_route("/create", methods=["GET", "POST"], response_class=PlainTextResponse)
def create_quiz(request: Request, service_provider: ServiceProviderDep, body: BodyDep) -> Response:
    if request.method == "GET":
        return templates.TemplateResponse(request, "create.html")

    try:
        quiz = service_provider().create_quiz(body)
    except QuizDecodeError as e:
        logger.error("Failed to parse quiz data: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to parse quiz data: {e}",
        )
    except QuizServerError as e:
        logger.error("Failed to save quiz: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save quiz: {e}",
        )
    return PlainTextResponse("Quiz saved successfully", headers={"Location": f"/quiz/{quiz.id}"})


@router.get("/quizzes", response_class=HTMLResponse)
def quizzes_page(request: Request, svc: ServiceDep):
    return templates.TemplateResponse(request, "quizzes.html", {"quizzes": _list_summaries(svc)})


@router.get("/quizlist", response_model=list[QuizListItem])
def quiz_list(svc: ServiceDep):
    return [QuizListItem(id=s.id, title=s.title) for s in _list_summaries(svc)]


@router.api_route("/quiz/{quiz_id}", methods=["GET", "DELETE"], response_class=PlainTextResponse)
def quiz_detail(quiz_id: str, request: Request, svc: ServiceDep) -> Response:
    if request.method == "DELETE":
        return _delete_quiz(quiz_id, svc)

    try:
        quiz = svc.get_quiz(quiz_id)
    except QuizNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Quiz not found: {e}")
    except QuizServerError as e:
        logger.error("Failed to load quiz %s: %s", quiz_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load quiz: {e}",
        )
    return PlainTextResponse(encode_quiz(quiz))


def _delete_quiz(quiz_id: str, svc: QuizService) -> Response:
    try:
        svc.delete_quiz(quiz_id)
    except QuizNotFoundError as e:
        logger.error("Failed to delete quiz %s: %s", quiz_id, e)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Quiz not found: {e}")
    except QuizServerError as e:
        logger.error("Failed to delete quiz %s: %s", quiz_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete quiz: {e}",
        )
    return PlainTextResponse("Quiz deleted successfully")
