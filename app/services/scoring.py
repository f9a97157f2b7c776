"""Diamond rewards for quiz answers"""

from typing import Dict, Optional, Tuple

from app.models.quiz import QuizLevel

# Rewards for attempts 1, 2, 3 and anything after
REWARD_TABLE: Dict[Optional[QuizLevel], Tuple[int, int, int, int]] = {
    QuizLevel.BEGINNER: (10, 5, 3, 0),
    QuizLevel.INTERMEDIATE: (20, 15, 10, 5),
    QuizLevel.ADVANCED: (30, 25, 20, 10),
    None: (10, 0, 0, 0),
}


def reward(level, attempt_number: int, is_correct: bool) -> int:
    """
    Diamonds earned for an answer.

    Args:
        level: A QuizLevel or the raw level string of the bucket
        attempt_number: 1-based attempt count on the question, current one included
        is_correct: Whether this attempt was correct

    Returns:
        Diamonds for this attempt; wrong answers earn nothing
    """
    if not is_correct or attempt_number < 1:
        return 0

    if not isinstance(level, QuizLevel):
        level = QuizLevel.parse(level)

    rewards = REWARD_TABLE[level]
    return rewards[min(attempt_number, len(rewards)) - 1]
