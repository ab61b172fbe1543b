import itertools

import pytest
from fastapi.testclient import TestClient

from quizserver.main import app
from quizserver.api.routers.quizzes import get_service, get_service_provider
from quizserver.repositories.filesystem_repository import FileQuizRepository
from quizserver.services.quiz_service import QuizService


@pytest.fixture
def quizzes_dir(tmp_path):
    return tmp_path / "quizzes"


@pytest.fixture
def repo(quizzes_dir):
    return FileQuizRepository(quizzes_dir)


@pytest.fixture
def service(repo):
    # nanosecond-shaped ids that never collide within a test
    ids = itertools.count(1_700_000_000_000_000_000)
    return QuizService(repo, id_factory=lambda: str(next(ids)))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    app.dependency_overrides[get_service_provider] = lambda: lambda: service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
