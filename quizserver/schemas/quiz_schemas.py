from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_empty(v: Any) -> Any:
    # `text: ~` decodes to None; a string field reads it as empty
    return "" if v is None else v


class QuestionIn(BaseModel):
    # scalars such as `text: 42` are read as strings, like any YAML decoder into a string field
    model_config = ConfigDict(coerce_numbers_to_str=True)

    text: str = ""
    code: Optional[str] = None
    type: str = ""
    options: List[str] = Field(default_factory=list)
    answers: List[int] = Field(default_factory=list)

    @field_validator("text", "type", mode="before")
    @classmethod
    def _empty_text(cls, v: Any) -> Any:
        return _null_as_empty(v)

    @field_validator("options", mode="before")
    @classmethod
    def _empty_options(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [_null_as_empty(item) for item in v]
        return v

    @field_validator("answers", mode="before")
    @classmethod
    def _empty_answers(cls, v: Any) -> Any:
        return [] if v is None else v


class QuizCreateIn(BaseModel):
    """Body of POST /create. Client-supplied ids are ignored."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = ""
    questions: List[QuestionIn] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _empty_title(cls, v: Any) -> Any:
        return _null_as_empty(v)

    @field_validator("questions", mode="before")
    @classmethod
    def _empty_questions(cls, v: Any) -> Any:
        return [] if v is None else v


class QuestionDocument(QuestionIn):
    id: int


class QuizDocument(BaseModel):
    """A quiz as persisted in storage."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    title: str = ""
    questions: List[QuestionDocument] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _empty_title(cls, v: Any) -> Any:
        return _null_as_empty(v)

    @field_validator("questions", mode="before")
    @classmethod
    def _empty_questions(cls, v: Any) -> Any:
        return [] if v is None else v


class QuizListItem(BaseModel):
    id: str
    title: str
