"""
Student quiz progress service
Records answer attempts, awards diamonds and tracks bucket completion
"""

import logging
from typing import List, Optional, Union

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseException, NotFoundException, ValidationException
from app.models.quiz import AnswerAttempt, QuizLevel, QuizQuestion, StudentQuizProgress
from app.models.student import Student
from app.schemas.quiz import QuizQuestionResponse
from app.schemas.student_quiz import (
    AnswerResult,
    AnswerState,
    AnswerSubmission,
    BlockedResult,
    ProgressState,
    ProgressSummary,
    StudentQuizResponse,
)
from app.services.scoring import reward

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = "Quiz already completed today"
EMPTY_BUCKET_MESSAGE = "No quiz created for today"


class ProgressService:
    """Per-student, per-bucket progress state machine"""

    @staticmethod
    def get_or_create_progress(
        db: Session, student_id: int, date: str, level: str
    ) -> StudentQuizProgress:
        """Return the progress record for the triple, creating an empty one if needed"""
        progress = ProgressService._find_progress(db, student_id, date, level)
        if progress:
            return progress

        db.add(
            StudentQuizProgress(
                student_id=student_id,
                date=date,
                level=level,
                total_diamonds=0,
                completed=False,
            )
        )
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            progress = ProgressService._find_progress(db, student_id, date, level)
            if progress is None:
                # Not a lost race: the insert itself was rejected
                logger.error(
                    "Could not create progress for student %s on %s/%s: %s",
                    student_id, date, level, exc.orig,
                )
                if db.get(Student, student_id) is None:
                    raise NotFoundException("Student") from exc
                raise DatabaseException() from exc
            logger.info(
                "Progress for student %s on %s/%s created concurrently", student_id, date, level
            )
            return progress

        return ProgressService._find_progress(db, student_id, date, level)

    @staticmethod
    def fetch_bucket(db: Session, student_id: int, date: str, level: str) -> StudentQuizResponse:
        """Questions of a bucket together with the student's progress on it"""
        questions = ProgressService._bucket_questions(db, date, level)
        progress = ProgressService.get_or_create_progress(db, student_id, date, level)

        if not questions:
            if not progress.completed:
                progress.completed = True
                db.commit()
            return StudentQuizResponse(
                questions=[],
                progress=ProgressService._progress_state(db, progress),
                message=EMPTY_BUCKET_MESSAGE,
            )

        return StudentQuizResponse(
            questions=[QuizQuestionResponse.model_validate(q) for q in questions],
            progress=ProgressService._progress_state(db, progress),
        )

    @staticmethod
    def submit_answer(
        db: Session, student_id: int, submission: AnswerSubmission
    ) -> Union[AnswerResult, BlockedResult]:
        """
        Record one answer attempt.

        The attempt counter is incremented by a single UPDATE so concurrent
        submissions never lose or double-count an attempt. The reward write and
        the recompute that follow are last-writer-wins.

        Raises:
            ValidationException: If questionId, date, level or isCorrect is missing
        """
        if (
            not submission.question_id
            or not submission.date
            or not submission.level
            or submission.is_correct is None
        ):
            raise ValidationException("Missing parameters")

        question_id = str(submission.question_id)
        date, level = submission.date, submission.level
        is_correct = bool(submission.is_correct)

        progress = ProgressService.get_or_create_progress(db, student_id, date, level)
        if progress.completed:
            logger.info(
                "Blocked answer from student %s on completed bucket %s/%s",
                student_id, date, level,
            )
            return BlockedResult(blocked=True, message=BLOCKED_MESSAGE)

        ProgressService._ensure_answer_entry(db, progress.id, question_id)

        attempt_number = db.execute(
            update(AnswerAttempt)
            .where(
                AnswerAttempt.progress_id == progress.id,
                AnswerAttempt.question_id == question_id,
            )
            .values(attempts=AnswerAttempt.attempts + 1)
            .returning(AnswerAttempt.attempts)
            .execution_options(synchronize_session=False)
        ).scalar_one()
        db.commit()

        diamonds = reward(QuizLevel.parse(level), attempt_number, is_correct)

        if is_correct:
            db.execute(
                update(AnswerAttempt)
                .where(
                    AnswerAttempt.progress_id == progress.id,
                    AnswerAttempt.question_id == question_id,
                )
                .values(is_correct=True, earned_diamonds=diamonds)
                .execution_options(synchronize_session=False)
            )
            db.commit()

        answers = ProgressService._load_answers(db, progress.id)
        was_completed = progress.completed
        progress.total_diamonds = ProgressService.recompute_total(answers)
        progress.completed = ProgressService.is_bucket_complete(db, date, level, answers)
        db.commit()

        if progress.completed and not was_completed:
            logger.info("Student %s completed bucket %s/%s", student_id, date, level)

        states = [ProgressService._answer_state(a) for a in answers]
        current = next(s for s in states if s.question_id == question_id)

        logger.debug(
            "Answer recorded",
            extra={
                "student_id": student_id,
                "question_id": question_id,
                "attempt": attempt_number,
                "is_correct": is_correct,
                "diamonds": diamonds,
            },
        )

        return AnswerResult(
            success=True,
            attempts=current.attempts,
            earned_diamonds=current.earned_diamonds,
            total_diamonds=progress.total_diamonds,
            total=progress.total_diamonds,
            completed=progress.completed,
            answer=current,
            progress=ProgressSummary(
                total_diamonds=progress.total_diamonds,
                completed=progress.completed,
                answers=states,
            ),
        )

    @staticmethod
    def total_diamonds(db: Session, student_id: int) -> int:
        """All-time diamonds of a student across every bucket"""
        total = db.execute(
            select(func.coalesce(func.sum(StudentQuizProgress.total_diamonds), 0)).where(
                StudentQuizProgress.student_id == student_id
            )
        ).scalar_one()
        return int(total or 0)

    @staticmethod
    def recompute_total(answers: List[AnswerAttempt]) -> int:
        return sum(int(a.earned_diamonds or 0) for a in answers)

    @staticmethod
    def is_bucket_complete(
        db: Session, date: str, level: str, answers: List[AnswerAttempt]
    ) -> bool:
        """True when every question of the bucket has a correct answer, or the bucket is empty"""
        question_ids = {
            str(qid)
            for qid in db.execute(
                select(QuizQuestion.id).where(QuizQuestion.date == date, QuizQuestion.level == level)
            ).scalars()
        }
        if not question_ids:
            return True
        solved = {a.question_id for a in answers if a.is_correct}
        return question_ids <= solved

    @staticmethod
    def _find_progress(
        db: Session, student_id: int, date: str, level: str
    ) -> Optional[StudentQuizProgress]:
        return db.execute(
            select(StudentQuizProgress)
            .where(
                StudentQuizProgress.student_id == student_id,
                StudentQuizProgress.date == date,
                StudentQuizProgress.level == level,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    @staticmethod
    def _find_answer_id(db: Session, progress_id: int, question_id: str) -> Optional[int]:
        return db.execute(
            select(AnswerAttempt.id).where(
                AnswerAttempt.progress_id == progress_id,
                AnswerAttempt.question_id == question_id,
            )
        ).scalar_one_or_none()

    @staticmethod
    def _ensure_answer_entry(db: Session, progress_id: int, question_id: str) -> None:
        if ProgressService._find_answer_id(db, progress_id, question_id) is not None:
            return

        db.add(
            AnswerAttempt(
                progress_id=progress_id,
                question_id=question_id,
                attempts=0,
                earned_diamonds=0,
                is_correct=False,
            )
        )
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if ProgressService._find_answer_id(db, progress_id, question_id) is None:
                logger.error(
                    "Could not create answer entry for question %s in progress %s: %s",
                    question_id, progress_id, exc.orig,
                )
                raise DatabaseException() from exc
            logger.info("Answer entry for question %s created concurrently", question_id)

    @staticmethod
    def _load_answers(db: Session, progress_id: int) -> List[AnswerAttempt]:
        return list(
            db.execute(
                select(AnswerAttempt)
                .where(AnswerAttempt.progress_id == progress_id)
                .order_by(AnswerAttempt.id)
                .execution_options(populate_existing=True)
            ).scalars()
        )

    @staticmethod
    def _bucket_questions(db: Session, date: str, level: str) -> List[QuizQuestion]:
        return list(
            db.execute(
                select(QuizQuestion)
                .where(QuizQuestion.date == date, QuizQuestion.level == level)
                .order_by(QuizQuestion.id)
            ).scalars()
        )

    @staticmethod
    def _answer_state(answer: AnswerAttempt) -> AnswerState:
        return AnswerState(
            question_id=str(answer.question_id),
            attempts=int(answer.attempts or 0),
            earned_diamonds=int(answer.earned_diamonds or 0),
            is_correct=bool(answer.is_correct),
        )

    @staticmethod
    def _progress_state(db: Session, progress: StudentQuizProgress) -> ProgressState:
        answers = ProgressService._load_answers(db, progress.id)
        return ProgressState(
            date=progress.date,
            level=progress.level,
            total_diamonds=int(progress.total_diamonds or 0),
            completed=bool(progress.completed),
            answers=[ProgressService._answer_state(a) for a in answers],
        )
