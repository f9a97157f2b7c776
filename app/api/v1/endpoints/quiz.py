"""
Quiz question management endpoints
Super admin only
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import require_super_admin
from app.models.student import Student
from app.schemas.quiz import (
    QuestionListResponse,
    QuestionResponse,
    QuizQuestionCreate,
    QuizQuestionResponse,
    QuizQuestionUpdate,
)
from app.services.questions import QuestionService

router = APIRouter()


@router.get("/{date}/{level}", response_model=QuestionListResponse)
async def get_questions(
    date: str,
    level: str,
    current_user: Student = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """Get all questions for a date and level"""
    questions = QuestionService.get_bucket(db, date, level)
    return QuestionListResponse(
        questions=[QuizQuestionResponse.model_validate(q) for q in questions]
    )


@router.post("", response_model=QuestionResponse)
async def create_question(
    question_data: QuizQuestionCreate,
    current_user: Student = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """Create a question"""
    question = QuestionService.create_question(db, question_data)
    return QuestionResponse(question=QuizQuestionResponse.model_validate(question))


@router.put("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: int,
    question_data: QuizQuestionUpdate,
    current_user: Student = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """Update a question"""
    question = QuestionService.update_question(db, question_id, question_data)
    return QuestionResponse(question=QuizQuestionResponse.model_validate(question))


@router.delete("/{question_id}")
async def delete_question(
    question_id: int,
    current_user: Student = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """Delete a question"""
    QuestionService.delete_question(db, question_id)
    return {"message": "Deleted"}
