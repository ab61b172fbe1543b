from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(frozen=True)
class Question:
    id: int
    text: str
    type: str
    options: List[str] = field(default_factory=list)
    answers: List[int] = field(default_factory=list)
    code: Optional[str] = None

@dataclass(frozen=True)
class QuizSummary:
    id: str
    title: str

@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    questions: List[Question] = field(default_factory=list)

    def summary(self) -> QuizSummary:
        return QuizSummary(id=self.id, title=self.title)
