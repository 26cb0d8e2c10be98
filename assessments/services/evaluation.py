# assessments/services/evaluation.py
import logging

from django.db import transaction
from django.db.models import Prefetch

from exams.language import ENGLISH, HINDI, participating_sections, resolve_questions
from exams.models import Question, QuestionOption
from ..exceptions import ConflictError, EvaluationError
from ..models import ExamAttempt, Result
from ..scoring import GradableQuestion, SubmittedAnswer, score_attempt
from .publisher import ResultPublisher

logger = logging.getLogger(__name__)


def load_exam_questions(exam_id):
    """Live questions of an exam with their options, in question order."""
    return list(
        Question.objects
        .filter(exam_id=exam_id, deleted_at__isnull=True)
        .select_related('section')
        .prefetch_related(Prefetch('options', queryset=QuestionOption.objects.order_by('option_order')))
        .order_by('question_number')
    )


def graded_question_set(exam, questions, language):
    """
    Language-resolved questions that belong to a participating section.
    Returns (resolved_language, sections, questions).
    """
    selection = resolve_questions(questions, language)
    sections = participating_sections(exam.sections.all(), selection.language)
    allowed = {section.id for section in sections}
    graded = [q for q in selection.questions if q.section_id in allowed]
    return selection.language, sections, graded


def _correct_value(options, language):
    """Expected value of a numerical question, read from its correct option."""
    for option in options:
        primary, secondary = option.option_text, option.option_text_hi
        if language == HINDI and (secondary or "").strip():
            return secondary.strip()
        if (primary or "").strip():
            return primary.strip()
        if (secondary or "").strip():
            return secondary.strip()
    return None


def to_gradable(question, language=ENGLISH):
    correct = [option for option in question.options.all() if option.is_correct]
    return GradableQuestion(
        id=question.id,
        section_id=question.section_id,
        type=question.type,
        marks=question.marks,
        negative_marks=question.negative_marks,
        correct_option_ids=tuple(str(option.id) for option in correct),
        correct_value=_correct_value(correct, language) if question.type == Question.QuestionType.NUMERICAL else None,
    )


def evaluate_attempt(attempt, cache, publisher=None):
    """
    Score a submitted attempt and publish its Result.

    All reads happen up front; scoring runs in memory. An attempt is
    evaluated at most once.
    """
    if not attempt.is_submitted:
        raise ConflictError("Exam has not been submitted")
    if Result.objects.filter(attempt=attempt).exists():
        raise ConflictError("Exam already evaluated")

    exam = attempt.exam
    questions = load_exam_questions(exam.id)
    answers = {
        answer.question_id: SubmittedAnswer(
            question_id=answer.question_id,
            value=answer.answer,
            time_taken=answer.time_taken,
            answer_id=answer.id,
        )
        for answer in attempt.answers.all()
    }

    language, sections, graded = graded_question_set(exam, questions, attempt.language or ENGLISH)
    if not graded:
        logger.error("Attempt %s has no gradable questions in %s", attempt.id, language)
        raise EvaluationError("No questions available for evaluation in selected language")

    evaluation = score_attempt(
        [to_gradable(question, language) for question in graded],
        answers,
        exam.pass_percentage,
    )
    logger.info(
        "Attempt %s scored %s/%s (%s correct, %s wrong, %s unattempted)",
        attempt.id, evaluation.score, evaluation.total_marks,
        evaluation.correct, evaluation.wrong, evaluation.unattempted,
    )

    publisher = publisher or ResultPublisher(cache)
    return publisher.publish(attempt, evaluation)


def pending_attempts():
    """Submitted attempts that never received a result."""
    return ExamAttempt.objects.filter(is_submitted=True, result__isnull=True).select_related('exam').order_by('submitted_at')


def evaluate_pending_attempts(cache, limit=None):
    """
    Re-run evaluation for attempts whose submission went through but whose
    evaluation failed. Returns (evaluated, failed) attempt ids.
    """
    attempts = pending_attempts()
    if limit:
        attempts = attempts[:limit]

    evaluated, failed = [], []
    for attempt in attempts:
        try:
            # One savepoint per attempt
            with transaction.atomic():
                evaluate_attempt(attempt, cache)
        except (ConflictError, EvaluationError) as exc:
            logger.warning("Re-evaluation of attempt %s skipped: %s", attempt.id, exc)
            failed.append(attempt.id)
        except Exception:
            logger.exception("Re-evaluation of attempt %s failed", attempt.id)
            failed.append(attempt.id)
        else:
            evaluated.append(attempt.id)
    return evaluated, failed
