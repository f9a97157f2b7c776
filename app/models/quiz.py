"""
Quiz and progress models for DiamondQuiz
"""

from typing import Optional

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.sql import func
from app.core.database import Base
import enum

class QuizLevel(enum.Enum):
    """Recognised quiz levels"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["QuizLevel"]:
        """
        Map a free-form level string onto a known level.

        Matching is case-insensitive on substrings, so "Beginner-A" and
        "advance" are both recognised. Returns None for anything else.
        """
        lvl = str(raw or "").lower()
        if "begin" in lvl:
            return cls.BEGINNER
        if "inter" in lvl:
            return cls.INTERMEDIATE
        if "advance" in lvl:
            return cls.ADVANCED
        return None

class QuizQuestion(Base):
    """A question in the (date, level) bucket"""
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(String, nullable=False, index=True)
    level = Column(String, nullable=False, index=True)

    question = Column(Text, nullable=False)
    options = Column(JSON, default=list)
    correct_answer = Column(String, nullable=True)
    explanation = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

class StudentQuizProgress(Base):
    """Per-student progress on one (date, level) bucket"""
    __tablename__ = "student_quiz_progress"
    __table_args__ = (
        UniqueConstraint("student_id", "date", "level", name="uq_progress_student_date_level"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    date = Column(String, nullable=False)
    level = Column(String, nullable=False)

    total_diamonds = Column(Integer, default=0, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

class AnswerAttempt(Base):
    """Attempts and reward for one question inside a progress record"""
    __tablename__ = "answer_attempts"
    __table_args__ = (
        UniqueConstraint("progress_id", "question_id", name="uq_answer_progress_question"),
    )

    id = Column(Integer, primary_key=True, index=True)
    progress_id = Column(Integer, ForeignKey("student_quiz_progress.id"), nullable=False, index=True)
    question_id = Column(String, nullable=False)

    attempts = Column(Integer, default=0, nullable=False)
    earned_diamonds = Column(Integer, default=0, nullable=False)
    is_correct = Column(Boolean, default=False, nullable=False)

    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
