import logging
import time
from typing import Callable, List

from ..domain.codec import decode_quiz_request
from ..domain.model import Question, Quiz, QuizSummary
from ..repositories.quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


def new_quiz_id() -> str:
    return str(time.time_ns())


class QuizService:
    def __init__(self, repo: QuizRepository, id_factory: Callable[[], str] = new_quiz_id) -> None:
        self.repo = repo
        self.id_factory = id_factory

    def create_quiz(self, raw: bytes) -> Quiz:
        payload = decode_quiz_request(raw)
        quiz = Quiz(
            id=self.id_factory(),
            title=payload.title,
            # question ids are 1-based and follow the submitted order
            questions=[
                Question(
                    id=position,
                    text=q.text,
                    type=q.type,
                    options=list(q.options),
                    answers=list(q.answers),
                    code=q.code or None,
                )
                for position, q in enumerate(payload.questions, start=1)
            ],
        )
        self.repo.save_quiz(quiz)
        logger.info("Created quiz %s with %d questions", quiz.id, len(quiz.questions))
        return quiz

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self.repo.get_quiz(quiz_id)

    def list_quizzes(self) -> List[QuizSummary]:
        return [quiz.summary() for quiz in self.repo.list_quizzes()]

    def delete_quiz(self, quiz_id: str) -> None:
        self.repo.delete_quiz(quiz_id)
