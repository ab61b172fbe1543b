"""YAML encoding of quiz documents and the storage naming scheme.

Every quiz lives in one document named ``quiz-<id>.yaml``::

    id: '1718000000000000000'
    title: Go Basics
    questions:
    - id: 1
      text: 2+2?
      type: single-choice
      options: ['3', '4']
      answers: [1]

``code`` is written only for questions that carry a snippet.
"""
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..core.errors import QuizDecodeError
from ..schemas.quiz_schemas import QuizCreateIn, QuizDocument
from .model import Question, Quiz

NAME_PREFIX = "quiz-"
NAME_SUFFIX = ".yaml"


class QuizLoader(yaml.SafeLoader):
    """Safe loader that keeps yes/no/true/false and dates as plain text."""


QuizLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in ("tag:yaml.org,2002:bool", "tag:yaml.org,2002:timestamp")
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def object_name(quiz_id: str) -> str:
    return f"{NAME_PREFIX}{quiz_id}{NAME_SUFFIX}"


def quiz_id_from_name(name: str) -> Optional[str]:
    """Return the quiz id encoded in a file/object name, or None for foreign names."""
    if not (name.startswith(NAME_PREFIX) and name.endswith(NAME_SUFFIX)):
        return None
    quiz_id = name[len(NAME_PREFIX):-len(NAME_SUFFIX)]
    return quiz_id or None


def question_to_document(question: Question) -> dict:
    doc: dict[str, Any] = {"id": question.id, "text": question.text}
    if question.code:
        doc["code"] = question.code
    doc["type"] = question.type
    doc["options"] = list(question.options)
    doc["answers"] = list(question.answers)
    return doc


def quiz_to_document(quiz: Quiz) -> dict:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "questions": [question_to_document(q) for q in quiz.questions],
    }


def encode_quiz(quiz: Quiz) -> bytes:
    text = yaml.safe_dump(quiz_to_document(quiz), sort_keys=False, allow_unicode=True)
    return text.encode("utf-8")


def _load_mapping(data: Union[bytes, str]) -> dict:
    try:
        doc = yaml.load(data, Loader=QuizLoader)
    except yaml.YAMLError as e:
        raise QuizDecodeError(f"invalid YAML: {e}") from e
    if not isinstance(doc, dict):
        raise QuizDecodeError(f"expected a mapping, got {type(doc).__name__}")
    return doc


def decode_quiz_request(data: Union[bytes, str]) -> QuizCreateIn:
    try:
        return QuizCreateIn.model_validate(_load_mapping(data))
    except ValidationError as e:
        raise QuizDecodeError(str(e)) from e


def decode_quiz(data: Union[bytes, str]) -> Quiz:
    try:
        doc = QuizDocument.model_validate(_load_mapping(data))
    except ValidationError as e:
        raise QuizDecodeError(str(e)) from e
    return Quiz(
        id=doc.id,
        title=doc.title,
        questions=[
            Question(
                id=q.id,
                text=q.text,
                type=q.type,
                options=list(q.options),
                answers=list(q.answers),
                code=q.code or None,
            )
            for q in doc.questions
        ],
    )
