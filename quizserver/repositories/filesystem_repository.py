import logging
from pathlib import Path
from typing import List, Union

from ..core.errors import QuizDecodeError, QuizNotFoundError, StorageError
from ..domain.codec import decode_quiz, encode_quiz, object_name, quiz_id_from_name
from ..domain.model import Quiz
from .quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


class FileQuizRepository(QuizRepository):
    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def _path(self, quiz_id: str) -> Path:
        return self.directory / object_name(quiz_id)

    def save_quiz(self, quiz: Quiz) -> None:
        path = self._path(quiz.id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(encode_quiz(quiz))
        except OSError as e:
            raise StorageError(f"failed to write {path}: {e}") from e
        logger.info("Saved quiz %s to %s", quiz.id, path)

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self._read(self._path(quiz_id), quiz_id)

    def _read(self, path: Path, quiz_id: str) -> Quiz:
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise QuizNotFoundError(quiz_id, f"open {path}: no such file") from e
        except OSError as e:
            raise StorageError(f"failed to read {path}: {e}") from e
        logger.debug("Read quiz %s from %s", quiz_id, path)
        try:
            return decode_quiz(data)
        except QuizDecodeError as e:
            raise QuizDecodeError(f"failed to parse {path.name}: {e}") from e

    def list_quizzes(self) -> List[Quiz]:
        # nothing has been saved yet
        if not self.directory.exists():
            return []
        try:
            names = sorted(entry.name for entry in self.directory.iterdir() if entry.is_file())
        except OSError as e:
            raise StorageError(f"failed to read directory {self.directory}: {e}") from e

        quizzes = []
        for name in names:
            quiz_id = quiz_id_from_name(name)
            if quiz_id is None:
                continue
            quizzes.append(self._read(self.directory / name, quiz_id))
        return quizzes

    def delete_quiz(self, quiz_id: str) -> None:
        path = self._path(quiz_id)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise QuizNotFoundError(quiz_id, f"remove {path}: no such file") from e
        except OSError as e:
            raise StorageError(f"failed to remove {path}: {e}") from e
        logger.info("Deleted quiz %s", quiz_id)
