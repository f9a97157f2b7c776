"""
Leaderboard endpoints
Global ranking by diamonds and per-student summaries
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.security import TokenData, get_current_user_token
from app.schemas.leaderboard import LeaderboardPage, StudentSummary
from app.services.leaderboard import LeaderboardService

router = APIRouter()


@router.get("", response_model=LeaderboardPage)
async def get_leaderboard(
    page: int = Query(1),
    per_page: int = Query(settings.LEADERBOARD_DEFAULT_PER_PAGE, alias="perPage"),
    focus: bool = Query(False),
    token_data: TokenData = Depends(get_current_user_token),
    db: Session = Depends(get_db),
):
    """
    Get a page of the global leaderboard

    With focus=true the page holding the caller's rank is returned instead
    of the requested one.
    """
    return LeaderboardService.get_leaderboard(db, token_data.user_id, page, per_page, focus)


@router.get("/summary/{student_id}", response_model=StudentSummary)
async def get_student_summary(
    student_id: int,
    token_data: TokenData = Depends(get_current_user_token),
    db: Session = Depends(get_db),
):
    """Get per-level totals, overall total and rank of a student"""
    return LeaderboardService.get_student_summary(db, student_id)
