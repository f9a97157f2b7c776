"""
API v1 main router
Combines all v1 endpoint routers
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    leaderboard,
    quiz,
    student_quiz,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(quiz.router, prefix="/quiz", tags=["Quiz"])
api_router.include_router(student_quiz.router, prefix="/student-quiz", tags=["Student Quiz"])
api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["Leaderboard"])
