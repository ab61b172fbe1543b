from unittest.mock import MagicMock

import pytest
from storage3.utils import StorageException

from quizserver.core.errors import QuizDecodeError, QuizNotFoundError, StorageError
from quizserver.domain.codec import encode_quiz
from quizserver.domain.model import Question, Quiz
from quizserver.repositories.supabase_repository import SupabaseQuizRepository

NOT_FOUND = {"statusCode": "404", "error": "not_found", "message": "Object not found"}


def make_quiz(quiz_id, title="Quiz"):
    return Quiz(id=quiz_id, title=title, questions=[Question(id=1, text="q", type="single", options=["a"], answers=[0])])


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def bucket(client):
    return client.storage.from_.return_value


@pytest.fixture
def repo(client):
    return SupabaseQuizRepository(client, "quizzes")


def test_save_uploads_yaml_document(repo, client, bucket):
    quiz = make_quiz("100")
    repo.save_quiz(quiz)

    client.storage.from_.assert_called_with("quizzes")
    bucket.upload.assert_called_once_with(
        "quiz-100.yaml", encode_quiz(quiz), {"content-type": "application/x-yaml"}
    )


def test_save_failure_is_storage_error(repo, bucket):
    bucket.upload.side_effect = StorageException({"statusCode": 500, "message": "bucket unavailable"})

    with pytest.raises(StorageError, match="bucket unavailable"):
        repo.save_quiz(make_quiz("100"))


def test_get_downloads_and_decodes(repo, bucket):
    quiz = make_quiz("100", "Remote")
    bucket.download.return_value = encode_quiz(quiz)

    assert repo.get_quiz("100") == quiz
    bucket.download.assert_called_once_with("quiz-100.yaml")


def test_get_missing_object_is_not_found(repo, bucket):
    bucket.download.side_effect = StorageException(NOT_FOUND)

    with pytest.raises(QuizNotFoundError):
        repo.get_quiz("100")


def test_get_network_failure_is_storage_error(repo, bucket):
    bucket.download.side_effect = StorageException({"statusCode": 503, "message": "upstream timeout"})

    with pytest.raises(StorageError):
        repo.get_quiz("100")


def test_get_corrupt_object_is_decode_error(repo, bucket):
    bucket.download.return_value = b"id: [unclosed"

    with pytest.raises(QuizDecodeError, match="quiz-100.yaml"):
        repo.get_quiz("100")


def test_list_pages_through_bucket_and_fetches_each_quiz(repo, bucket):
    repo.PAGE_SIZE = 2
    stored = {f"quiz-{i}.yaml": make_quiz(str(i), f"Quiz {i}") for i in (1, 2, 3)}
    bucket.list.side_effect = [
        [{"name": "quiz-1.yaml"}, {"name": "quiz-2.yaml"}],
        [{"name": "quiz-3.yaml"}, {"name": ".emptyFolderPlaceholder"}],
        [],
    ]
    bucket.download.side_effect = lambda name: encode_quiz(stored[name])

    quizzes = repo.list_quizzes()

    assert [q.title for q in quizzes] == ["Quiz 1", "Quiz 2", "Quiz 3"]
    assert bucket.list.call_count == 3
    offsets = [c.args[1]["offset"] for c in bucket.list.call_args_list]
    assert offsets == [0, 2, 4]
    assert bucket.download.call_count == 3


def test_list_of_empty_bucket(repo, bucket):
    bucket.list.return_value = []

    assert repo.list_quizzes() == []
    bucket.download.assert_not_called()


def test_list_failure_is_storage_error(repo, bucket):
    bucket.list.side_effect = StorageException({"statusCode": 403, "message": "forbidden"})

    with pytest.raises(StorageError, match="failed to list bucket quizzes"):
        repo.list_quizzes()


def test_delete_removes_object(repo, bucket):
    bucket.remove.return_value = [{"name": "quiz-100.yaml"}]

    repo.delete_quiz("100")

    bucket.remove.assert_called_once_with(["quiz-100.yaml"])


def test_delete_missing_object_is_not_found(repo, bucket):
    bucket.remove.return_value = []

    with pytest.raises(QuizNotFoundError):
        repo.delete_quiz("100")


def test_delete_failure_is_storage_error(repo, bucket):
    bucket.remove.side_effect = StorageException({"statusCode": 500, "message": "boom"})

    with pytest.raises(StorageError):
        repo.delete_quiz("100")
