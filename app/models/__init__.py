"""
DiamondQuiz Models Package
"""

from app.models.student import Student, StudentRole
from app.models.quiz import (
    QuizQuestion, StudentQuizProgress, AnswerAttempt, QuizLevel
)

__all__ = [
    "Student", "StudentRole",
    "QuizQuestion", "StudentQuizProgress", "AnswerAttempt", "QuizLevel"
]
