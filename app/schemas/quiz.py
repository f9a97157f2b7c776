"""
Quiz question schemas for DiamondQuiz
"""

from typing import List, Optional
from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel

class QuizQuestionBase(CamelModel):
    """Base question schema"""
    date: str = Field(..., min_length=1)
    level: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)
    options: List[str] = []
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None

class QuizQuestionCreate(QuizQuestionBase):
    """Question creation schema"""
    pass

class QuizQuestionUpdate(CamelModel):
    """Question update schema"""
    date: Optional[str] = None
    level: Optional[str] = None
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None

class QuizQuestionResponse(QuizQuestionBase):
    """Question response schema"""
    id: int
    created_at: Optional[datetime] = None

class QuestionListResponse(CamelModel):
    questions: List[QuizQuestionResponse]

class QuestionResponse(CamelModel):
    question: QuizQuestionResponse
