"""Quiz question service"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.quiz import QuizQuestion
from app.schemas.quiz import QuizQuestionCreate, QuizQuestionUpdate

logger = logging.getLogger(__name__)


class QuestionService:
    @staticmethod
    def get_bucket(db: Session, date: str, level: str) -> List[QuizQuestion]:
        """Get questions of a (date, level) bucket"""
        return list(
            db.execute(
                select(QuizQuestion)
                .where(QuizQuestion.date == date, QuizQuestion.level == level)
                .order_by(QuizQuestion.id)
            ).scalars()
        )

    @staticmethod
    def create_question(db: Session, question_data: QuizQuestionCreate) -> QuizQuestion:
        """Create question"""
        question = QuizQuestion(**question_data.model_dump())
        db.add(question)
        db.commit()
        db.refresh(question)
        logger.info("Created question %s for %s/%s", question.id, question.date, question.level)
        return question

    @staticmethod
    def update_question(
        db: Session, question_id: int, question_data: QuizQuestionUpdate
    ) -> QuizQuestion:
        """Update question fields that were sent"""
        question = db.get(QuizQuestion, question_id)
        if not question:
            raise NotFoundException("Question")

        for field, value in question_data.model_dump(exclude_unset=True).items():
            setattr(question, field, value)

        db.commit()
        db.refresh(question)
        return question

    @staticmethod
    def delete_question(db: Session, question_id: int) -> None:
        """Delete question"""
        question = db.get(QuizQuestion, question_id)
        if not question:
            raise NotFoundException("Question")
        db.delete(question)
        db.commit()
        logger.info("Deleted question %s", question_id)
