"""
Student quiz endpoints
Daily questions, answer submission and diamond totals
"""

from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ValidationException
from app.core.security import TokenData, get_current_user_token
from app.schemas.student_quiz import (
    AnswerResult,
    AnswerSubmission,
    BlockedResult,
    StudentQuizResponse,
    TotalResponse,
)
from app.services.progress import ProgressService

router = APIRouter()


def require_student_id(token_data: TokenData = Depends(get_current_user_token)) -> int:
    """Identity of the caller; a token without one is a client error"""
    if token_data.user_id is None:
        raise ValidationException("Missing user")
    return token_data.user_id


# Must be registered before the /{date}/{level} route
@router.get("/total", response_model=TotalResponse)
async def get_total_diamonds(
    student_id: int = Depends(require_student_id),
    db: Session = Depends(get_db),
):
    """Get overall diamonds of the logged-in student"""
    return TotalResponse(total=ProgressService.total_diamonds(db, student_id))


@router.post("/answer", response_model=Union[AnswerResult, BlockedResult])
async def submit_answer(
    submission: AnswerSubmission,
    student_id: int = Depends(require_student_id),
    db: Session = Depends(get_db),
):
    """Record an answer attempt and award diamonds"""
    return ProgressService.submit_answer(db, student_id, submission)


@router.get("/{date}/{level}", response_model=StudentQuizResponse, response_model_exclude_none=True)
async def get_student_quiz(
    date: str,
    level: str,
    student_id: int = Depends(require_student_id),
    db: Session = Depends(get_db),
):
    """Get the questions of a bucket with the student's progress on it"""
    return ProgressService.fetch_bucket(db, student_id, date, level)
