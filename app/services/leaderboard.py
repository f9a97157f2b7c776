"""
Leaderboard service
Ranks students by all-time diamonds and serves paged views
"""

import logging
import math
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.quiz import QuizLevel, StudentQuizProgress
from app.models.student import Student
from app.schemas.leaderboard import (
    LeaderboardEntry,
    LeaderboardPage,
    LeaderboardRow,
    LevelTotals,
    StudentSummary,
    SummaryStudent,
)

logger = logging.getLogger(__name__)


def paginate_standings(
    standings: List[LeaderboardEntry],
    requester_id: Optional[int],
    page: int = 1,
    per_page: int = 10,
    focus: bool = False,
) -> LeaderboardPage:
    """
    Slice ranked standings into one page.

    Args:
        standings: Entries already sorted and ranked 1..N
        requester_id: Student asking; their row is flagged with is_you
        page: Requested 1-based page, clamped to the available range
        per_page: Rows per page, at least 1
        focus: Jump to the page holding the requester's rank when they have one

    Returns:
        LeaderboardPage with top3, the chosen page and the requester's rank
    """
    page = max(1, page)
    per_page = max(1, per_page)

    if not standings:
        return LeaderboardPage(
            top3=[], page=1, per_page=per_page, total_count=0, user_rank=None, page_list=[]
        )

    total_count = len(standings)
    user_rank = None
    if requester_id is not None:
        user_rank = next((e.rank for e in standings if e.student_id == requester_id), None)

    if focus and user_rank:
        page = (user_rank - 1) // per_page + 1
    else:
        page = min(page, max(1, math.ceil(total_count / per_page)))

    start = (page - 1) * per_page
    page_list = [
        LeaderboardRow(**entry.model_dump(), is_you=entry.student_id == requester_id)
        for entry in standings[start:start + per_page]
    ]

    return LeaderboardPage(
        top3=standings[:3],
        page=page,
        per_page=per_page,
        total_count=total_count,
        user_rank=user_rank,
        page_list=page_list,
    )


class LeaderboardService:
    """Read-through aggregation over all progress records; nothing is cached"""

    @staticmethod
    def get_standings(db: Session) -> List[LeaderboardEntry]:
        """Every student with progress, ordered by total diamonds"""
        totals = (
            select(
                StudentQuizProgress.student_id.label("student_id"),
                func.coalesce(func.sum(StudentQuizProgress.total_diamonds), 0).label("total"),
            )
            .group_by(StudentQuizProgress.student_id)
            .subquery()
        )
        rows = db.execute(
            select(totals.c.student_id, totals.c.total, Student.name, Student.email)
            .select_from(totals.outerjoin(Student, Student.id == totals.c.student_id))
            .order_by(totals.c.total.desc(), totals.c.student_id.asc())
        ).all()

        return [
            LeaderboardEntry(
                student_id=row.student_id,
                name=row.name or row.email or "Unknown",
                score=int(row.total or 0),
                rank=idx + 1,
            )
            for idx, row in enumerate(rows)
        ]

    @staticmethod
    def get_leaderboard(
        db: Session,
        requester_id: Optional[int],
        page: int = 1,
        per_page: int = 10,
        focus: bool = False,
    ) -> LeaderboardPage:
        standings = LeaderboardService.get_standings(db)
        return paginate_standings(standings, requester_id, page, per_page, focus)

    @staticmethod
    def get_user_rank(db: Session, student_id: int) -> Optional[int]:
        for entry in LeaderboardService.get_standings(db):
            if entry.student_id == student_id:
                return entry.rank
        return None

    @staticmethod
    def get_student_summary(db: Session, student_id: int) -> StudentSummary:
        """
        Per-level totals, overall total and rank for one student

        Raises:
            NotFoundException: If the student does not exist
        """
        student = db.get(Student, student_id)
        if not student:
            raise NotFoundException("Student")

        rows = db.execute(
            select(
                StudentQuizProgress.level,
                func.coalesce(func.sum(StudentQuizProgress.total_diamonds), 0),
            )
            .where(StudentQuizProgress.student_id == student_id)
            .group_by(StudentQuizProgress.level)
        ).all()

        levels = LevelTotals()
        for raw_level, total in rows:
            level = QuizLevel.parse(raw_level)
            if level is None:
                logger.debug("Dropping unrecognised level %r from summary", raw_level)
                continue
            field = level.value
            setattr(levels, field, getattr(levels, field) + int(total or 0))

        overall = levels.beginner + levels.intermediate + levels.advanced

        return StudentSummary(
            student=SummaryStudent(id=student.id, name=student.name, email=student.email),
            levels=levels,
            overall=overall,
            rank=LeaderboardService.get_user_rank(db, student_id),
        )
