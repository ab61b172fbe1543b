import logging
from typing import List

from storage3.utils import StorageException
from supabase import Client

from ..core.errors import QuizDecodeError, QuizNotFoundError, StorageError
from ..domain.codec import decode_quiz, encode_quiz, object_name, quiz_id_from_name
from ..domain.model import Quiz
from .quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


def _is_not_found(exc: StorageException) -> bool:
    # Storage API reports a missing object either as a 404 status or as a
    # 400 with a "not found" message, depending on the endpoint
    if str(getattr(exc, "status", "")) == "404":
        return True
    return "not found" in str(exc).lower()


class SupabaseQuizRepository(QuizRepository):
    """Quiz documents as objects in a Supabase Storage bucket."""

    PAGE_SIZE = 100
    CONTENT_TYPE = "application/x-yaml"

    def __init__(self, client: Client, bucket: str) -> None:
        self.client = client
        self.bucket = bucket

    def _objects(self):
        return self.client.storage.from_(self.bucket)

    def save_quiz(self, quiz: Quiz) -> None:
        name = object_name(quiz.id)
        try:
            self._objects().upload(name, encode_quiz(quiz), {"content-type": self.CONTENT_TYPE})
        except StorageException as e:
            raise StorageError(f"failed to upload {name} to bucket {self.bucket}: {e}") from e
        logger.info("Uploaded quiz %s to bucket %s", quiz.id, self.bucket)

    def get_quiz(self, quiz_id: str) -> Quiz:
        return self._fetch(object_name(quiz_id), quiz_id)

    def _fetch(self, name: str, quiz_id: str) -> Quiz:
        try:
            data = self._objects().download(name)
        except StorageException as e:
            if _is_not_found(e):
                raise QuizNotFoundError(quiz_id, f"object {name} not found in bucket {self.bucket}") from e
            raise StorageError(f"failed to retrieve {name} from bucket {self.bucket}: {e}") from e
        logger.debug("Downloaded %s from bucket %s", name, self.bucket)
        try:
            return decode_quiz(data)
        except QuizDecodeError as e:
            raise QuizDecodeError(f"failed to parse {name}: {e}") from e

    def _list_names(self) -> List[str]:
        names: List[str] = []
        offset = 0
        while True:
            try:
                page = self._objects().list(
                    "",
                    {
                        "limit": self.PAGE_SIZE,
                        "offset": offset,
                        "sortBy": {"column": "name", "order": "asc"},
                    },
                )
            except StorageException as e:
                raise StorageError(f"failed to list bucket {self.bucket}: {e}") from e
            names.extend(item["name"] for item in page)
            if len(page) < self.PAGE_SIZE:
                return names
            offset += self.PAGE_SIZE

    def list_quizzes(self) -> List[Quiz]:
        quizzes = []
        # one download per object
        for name in self._list_names():
            quiz_id = quiz_id_from_name(name)
            if quiz_id is None:
                continue
            quizzes.append(self._fetch(name, quiz_id))
        return quizzes

    def delete_quiz(self, quiz_id: str) -> None:
        name = object_name(quiz_id)
        try:
            removed = self._objects().remove([name])
        except StorageException as e:
            if _is_not_found(e):
                raise QuizNotFoundError(quiz_id, f"object {name} not found in bucket {self.bucket}") from e
            raise StorageError(f"failed to delete {name} from bucket {self.bucket}: {e}") from e
        # remove() answers with the objects it deleted
        if not removed:
            raise QuizNotFoundError(quiz_id, f"object {name} not found in bucket {self.bucket}")
        logger.info("Deleted quiz %s from bucket %s", quiz_id, self.bucket)
