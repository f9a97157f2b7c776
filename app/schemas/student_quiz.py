"""Student quiz progress schemas"""

from typing import List, Optional

from app.schemas.base import CamelModel
from app.schemas.quiz import QuizQuestionResponse


class AnswerSubmission(CamelModel):
    """Body of POST /student-quiz/answer; presence is checked by the service"""

    question_id: Optional[str] = None
    date: Optional[str] = None
    level: Optional[str] = None
    is_correct: Optional[bool] = None

    class Config:
        coerce_numbers_to_str = True


class AnswerState(CamelModel):
    question_id: str
    attempts: int = 0
    earned_diamonds: int = 0
    is_correct: bool = False


class ProgressState(CamelModel):
    date: str
    level: str
    total_diamonds: int = 0
    completed: bool = False
    answers: List[AnswerState] = []


class ProgressSummary(CamelModel):
    total_diamonds: int
    completed: bool
    answers: List[AnswerState]


class StudentQuizResponse(CamelModel):
    questions: List[QuizQuestionResponse]
    progress: ProgressState
    message: Optional[str] = None


class AnswerResult(CamelModel):
    success: bool = True
    attempts: int
    earned_diamonds: int
    total_diamonds: int
    total: int
    completed: bool
    answer: AnswerState
    progress: ProgressSummary


class BlockedResult(CamelModel):
    blocked: bool
    message: str


class TotalResponse(CamelModel):
    total: int
