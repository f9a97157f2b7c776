"""Leaderboard schemas"""

from typing import List, Optional

from app.schemas.base import CamelModel


class LeaderboardEntry(CamelModel):
    student_id: int
    name: str
    score: int
    rank: int


class LeaderboardRow(LeaderboardEntry):
    is_you: bool = False


class LeaderboardPage(CamelModel):
    top3: List[LeaderboardEntry]
    page: int
    per_page: int
    total_count: int
    user_rank: Optional[int] = None
    page_list: List[LeaderboardRow]


class SummaryStudent(CamelModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class LevelTotals(CamelModel):
    beginner: int = 0
    intermediate: int = 0
    advanced: int = 0


class StudentSummary(CamelModel):
    student: SummaryStudent
    levels: LevelTotals
    overall: int
    rank: Optional[int] = None
