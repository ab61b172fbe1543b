from abc import ABC, abstractmethod
from typing import List

from ..domain.model import Quiz


class QuizRepository(ABC):
    """Put/get/list/delete over a collection of quiz documents keyed by quiz id.

    Implementations raise QuizNotFoundError for a missing document,
    QuizDecodeError for a stored document that cannot be parsed and
    StorageError when the backend itself fails.
    """

    @abstractmethod
    def save_quiz(self, quiz: Quiz) -> None: ...

    @abstractmethod
    def get_quiz(self, quiz_id: str) -> Quiz: ...

    @abstractmethod
    def list_quizzes(self) -> List[Quiz]:
        """Every stored quiz, fully parsed, ordered by document name."""

    @abstractmethod
    def delete_quiz(self, quiz_id: str) -> None: ...
