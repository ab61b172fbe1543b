class QuizServerError(Exception):
    """Base class for errors surfaced as HTTP error responses."""


class QuizDecodeError(QuizServerError):
    """A quiz document (inbound body or stored blob) could not be decoded."""


class QuizNotFoundError(QuizServerError):
    def __init__(self, quiz_id: str, detail: str | None = None) -> None:
        self.quiz_id = quiz_id
        super().__init__(detail or f"quiz {quiz_id} does not exist")


class StorageError(QuizServerError):
    """The storage backend failed (I/O, network, misconfiguration)."""
