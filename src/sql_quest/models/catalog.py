"""Learning content models: sample queries and quiz questions."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator


class Difficulty(StrEnum):
    """Difficulty levels shared by sample queries and quiz questions."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SampleQuery(BaseModel):
    """A ready-made query shown in the explorer.

    Attributes:
        title: Short title.
        description: What the query demonstrates.
        query: SQL text runnable by the engine.
        difficulty: Difficulty level.
    """

    title: str = Field(..., description="Short title")
    description: str = Field(..., description="What the query demonstrates")
    query: str = Field(..., description="SQL text")
    difficulty: Difficulty = Field(default=Difficulty.BEGINNER, description="Difficulty level")


class QuizQuestion(BaseModel):
    """A multiple-choice quiz question.

    Attributes:
        id: Unique question id.
        difficulty: Difficulty level.
        category: SQL topic, e.g. ``WHERE`` or ``JOINS``.
        question: Question text.
        options: Answer options.
        correct_answer: Index of the correct option.
        explanation: Explanation shown after answering.
        sql_example: Example SQL illustrating the answer.
    """

    id: int = Field(..., ge=1, description="Unique question id")
    difficulty: Difficulty = Field(..., description="Difficulty level")
    category: str = Field(..., description="SQL topic")
    question: str = Field(..., min_length=1, description="Question text")
    options: list[str] = Field(..., min_length=2, description="Answer options")
    correct_answer: int = Field(..., ge=0, description="Index of the correct option")
    explanation: str = Field(default="", description="Explanation shown after answering")
    sql_example: str | None = Field(default=None, description="Example SQL")

    @model_validator(mode="after")
    def check_correct_answer(self) -> "QuizQuestion":
        """Ensure the correct answer index points at an option."""
        if self.correct_answer >= len(self.options):
            raise ValueError("correct_answer must index into options")
        return self

    def is_correct(self, answer_index: int) -> bool:
        return answer_index == self.correct_answer
