import logging
from typing import Mapping, Optional, Sequence
from sqlalchemy.orm import Session

from learnhub_backend.interface.grading import GradeResult, QuestionResult, QuizSubmission
from learnhub_backend.interface.progress import UserProgressGet
from learnhub_backend.model.course import Quiz, QuizQuestion
from learnhub_backend.permissions.core import require
from learnhub_backend.permissions.handlers import Action
from learnhub_backend.permissions.principal import Principal
from learnhub_backend.services.enrollment import EnrollmentLedger
from learnhub_backend.services.progress import ProgressTracker
from learnhub_backend.services.quizzes import QuizService

logger = logging.getLogger(__name__)


def grade(questions: Sequence[QuizQuestion], answers: Mapping[str, Optional[str]]) -> GradeResult:
    """
    Score a submission against the answer key.

    Only the quiz's own questions count: unanswered questions are wrong and
    answers to unknown question ids are ignored. The score is the percentage
    of correct answers, rounded to two decimals, and 0 for an empty quiz.
    """
    results = []
    correct_count = 0

    for question in questions:
        question_id = str(question.id)
        selected = answers.get(question_id)
        is_correct = selected is not None and selected == question.correct_answer

        if is_correct:
            correct_count += 1

        results.append(QuestionResult(
            question_id=question_id,
            question_text=question.question_text,
            selected_option=selected,
            correct_answer=question.correct_answer,
            is_correct=is_correct,
        ))

    total = len(questions)
    score = round(correct_count / total * 100, 2) if total > 0 else 0.0

    return GradeResult(
        score=score,
        correct_count=correct_count,
        total_questions=total,
        results=results,
    )


class QuizGradingEngine:

    def __init__(self, db: Session):
        self.db = db
        self.quizzes = QuizService(db)
        self.ledger = EnrollmentLedger(db)
        self.tracker = ProgressTracker(db)

    def submit(self, principal: Principal, quiz_id: str, submission: QuizSubmission) -> GradeResult:
        quiz, lesson, course = self.quizzes.resolve(quiz_id)

        require(principal, Quiz, Action.SUBMIT, lesson, self.ledger.authorization_context(principal))

        result = grade(quiz.questions, submission.answers)

        progress = self.tracker.record_quiz_result(
            principal.user_id,
            str(lesson.id),
            str(course.id),
            score=result.score,
        )

        logger.info(
            f"User {principal.user_id} scored {result.score} on quiz {quiz.id} "
            f"({result.correct_count}/{result.total_questions})"
        )

        return result.model_copy(update={"user_progress": UserProgressGet.model_validate(progress)})
