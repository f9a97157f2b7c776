"""Tests for the progress reconciler."""

import pytest

from app.core.exceptions import ValidationException
from app.models import AnswerAttempt, StudentQuizProgress
from app.schemas.student_quiz import AnswerResult, AnswerSubmission, BlockedResult
from app.services.progress import BLOCKED_MESSAGE, EMPTY_BUCKET_MESSAGE, ProgressService

from conftest import make_progress, make_questions, make_student

DATE = "2024-05-01"


def submit(db, student_id, question, correct, level="beginner", date=DATE):
    return ProgressService.submit_answer(
        db,
        student_id,
        AnswerSubmission(question_id=str(question.id), date=date, level=level, is_correct=correct),
    )


class TestFetchBucket:
    """Lazy creation of progress on question fetch."""

    def test_first_fetch_creates_progress(self, db):
        """A non-empty bucket gets an empty, open progress record."""
        student = make_student(db)
        make_questions(db, DATE, "beginner", 2)

        result = ProgressService.fetch_bucket(db, student.id, DATE, "beginner")

        assert len(result.questions) == 2
        assert result.progress.completed is False
        assert result.progress.total_diamonds == 0
        assert result.progress.answers == []
        assert result.message is None
        assert db.query(StudentQuizProgress).count() == 1

    def test_empty_bucket_completes_immediately(self, db):
        student = make_student(db)

        result = ProgressService.fetch_bucket(db, student.id, DATE, "beginner")

        assert result.questions == []
        assert result.progress.completed is True
        assert result.message == EMPTY_BUCKET_MESSAGE
        stored = db.query(StudentQuizProgress).one()
        db.refresh(stored)
        assert stored.completed is True

    def test_repeated_fetch_reuses_record(self, db):
        student = make_student(db)
        make_questions(db, DATE, "beginner", 1)

        ProgressService.fetch_bucket(db, student.id, DATE, "beginner")
        ProgressService.fetch_bucket(db, student.id, DATE, "beginner")

        assert db.query(StudentQuizProgress).count() == 1

    def test_buckets_are_per_level(self, db):
        student = make_student(db)
        make_questions(db, DATE, "beginner", 1)

        ProgressService.fetch_bucket(db, student.id, DATE, "beginner")
        ProgressService.fetch_bucket(db, student.id, DATE, "advanced")

        assert db.query(StudentQuizProgress).count() == 2


class TestSubmitAnswer:
    """Attempt counting, rewards, totals and completion."""

    def test_wrong_wrong_correct_on_beginner(self, db):
        """Attempts 1,2,3 earn 0,0,3 and the total ends at 3."""
        student = make_student(db)
        (question,) = make_questions(db, DATE, "beginner", 1)

        first = submit(db, student.id, question, False)
        second = submit(db, student.id, question, False)
        third = submit(db, student.id, question, True)

        assert [r.attempts for r in (first, second, third)] == [1, 2, 3]
        assert [r.earned_diamonds for r in (first, second, third)] == [0, 0, 3]
        assert third.total_diamonds == 3
        assert third.total == 3
        assert third.completed is True
        assert third.answer.is_correct is True

    def test_progress_created_by_first_submission(self, db):
        student = make_student(db)
        questions = make_questions(db, DATE, "intermediate", 2)

        result = submit(db, student.id, questions[0], True, level="intermediate")

        assert isinstance(result, AnswerResult)
        assert result.earned_diamonds == 20
        assert result.completed is False
        assert [a.question_id for a in result.progress.answers] == [str(questions[0].id)]

    def test_completion_requires_every_question(self, db):
        """Completion flips only when the last unsolved question is answered correctly."""
        student = make_student(db)
        questions = make_questions(db, DATE, "advanced", 3)

        results = [submit(db, student.id, q, True, level="advanced") for q in questions]

        assert [r.completed for r in results] == [False, False, True]
        assert results[-1].total_diamonds == 90

    def test_correct_answers_for_other_buckets_do_not_count(self, db):
        """An answer id outside the bucket never completes it."""
        student = make_student(db)
        make_questions(db, DATE, "beginner", 1)
        (stray,) = make_questions(db, "2024-05-02", "beginner", 1)

        result = submit(db, student.id, stray, True)

        assert result.completed is False

    def test_blocked_after_completion(self, db):
        """A completed bucket rejects further submissions without mutation."""
        student = make_student(db)
        (question,) = make_questions(db, DATE, "beginner", 1)
        done = submit(db, student.id, question, True)
        assert done.completed is True

        blocked = submit(db, student.id, question, False)

        assert isinstance(blocked, BlockedResult)
        assert blocked.blocked is True
        assert blocked.message == BLOCKED_MESSAGE
        entry = db.query(AnswerAttempt).one()
        db.refresh(entry)
        assert entry.attempts == 1
        progress = db.query(StudentQuizProgress).one()
        db.refresh(progress)
        assert progress.total_diamonds == 10

    def test_correct_flag_is_latched(self, db):
        """A wrong attempt after a correct one keeps is_correct and the reward."""
        student = make_student(db)
        questions = make_questions(db, DATE, "beginner", 2)

        submit(db, student.id, questions[0], True)
        result = submit(db, student.id, questions[0], False)

        assert result.attempts == 2
        assert result.answer.is_correct is True
        assert result.earned_diamonds == 10
        assert result.total_diamonds == 10

    def test_reanswer_overwrites_reward(self, db):
        """Re-answering a solved question before completion replaces its reward."""
        student = make_student(db)
        questions = make_questions(db, DATE, "beginner", 2)

        submit(db, student.id, questions[0], True)
        result = submit(db, student.id, questions[0], True)

        assert result.earned_diamonds == 5
        assert result.total_diamonds == 5

    def test_unrecognised_level_gets_flat_reward(self, db):
        student = make_student(db)
        questions = make_questions(db, DATE, "expert", 2)

        first = submit(db, student.id, questions[0], True, level="expert")
        submit(db, student.id, questions[1], False, level="expert")
        late = submit(db, student.id, questions[1], True, level="expert")

        assert first.earned_diamonds == 10
        assert late.earned_diamonds == 0
        assert late.total_diamonds == 10

    def test_empty_bucket_completes_on_first_submission(self, db):
        student = make_student(db)

        result = ProgressService.submit_answer(
            db,
            student.id,
            AnswerSubmission(question_id="q-1", date=DATE, level="beginner", is_correct=False),
        )

        assert result.completed is True
        assert result.attempts == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"date": DATE, "level": "beginner", "is_correct": True},
            {"question_id": "1", "level": "beginner", "is_correct": True},
            {"question_id": "1", "date": DATE, "is_correct": True},
            {"question_id": "1", "date": DATE, "level": "beginner"},
        ],
    )
    def test_missing_parameters_rejected_before_any_write(self, db, payload):
        student = make_student(db)

        with pytest.raises(ValidationException):
            ProgressService.submit_answer(db, student.id, AnswerSubmission(**payload))

        assert db.query(StudentQuizProgress).count() == 0
        assert db.query(AnswerAttempt).count() == 0

    def test_false_is_a_valid_answer(self, db):
        """is_correct=False is present, not missing."""
        student = make_student(db)
        (question,) = make_questions(db, DATE, "beginner", 1)

        result = submit(db, student.id, question, False)

        assert result.attempts == 1


class TestTotals:
    """Recompute helpers and per-student totals."""

    def test_recompute_is_idempotent(self, db):
        student = make_student(db)
        questions = make_questions(db, DATE, "intermediate", 3)
        submit(db, student.id, questions[0], True, level="intermediate")
        submit(db, student.id, questions[1], False, level="intermediate")
        submit(db, student.id, questions[1], True, level="intermediate")

        answers = db.query(AnswerAttempt).all()

        assert ProgressService.recompute_total(answers) == 35
        assert ProgressService.recompute_total(answers) == 35

    def test_ensure_answer_entry_is_idempotent(self, db):
        student = make_student(db)
        progress = ProgressService.get_or_create_progress(db, student.id, DATE, "beginner")

        ProgressService._ensure_answer_entry(db, progress.id, "7")
        ProgressService._ensure_answer_entry(db, progress.id, "7")

        assert db.query(AnswerAttempt).count() == 1

    def test_total_diamonds_across_buckets(self, db):
        student = make_student(db)
        other = make_student(db, name="Other")
        make_progress(db, student.id, DATE, "beginner", 10)
        make_progress(db, student.id, DATE, "advanced", 25)
        make_progress(db, other.id, DATE, "beginner", 99)

        assert ProgressService.total_diamonds(db, student.id) == 35

    def test_total_diamonds_without_activity(self, db):
        student = make_student(db)
        assert ProgressService.total_diamonds(db, student.id) == 0


class TestBucketCompletion:
    """Completion for bucket sizes 0..N."""

    @pytest.mark.parametrize("size", [0, 1, 2, 4])
    def test_complete_only_when_all_solved(self, db, size):
        questions = make_questions(db, DATE, "beginner", size)
        answers = [
            AnswerAttempt(question_id=str(q.id), attempts=1, earned_diamonds=10, is_correct=True)
            for q in questions
        ]

        assert ProgressService.is_bucket_complete(db, DATE, "beginner", answers) is True
        if size:
            answers[-1].is_correct = False
            assert ProgressService.is_bucket_complete(db, DATE, "beginner", answers) is False
