# assessments/services/attempts.py
"""
Attempt lifecycle: created -> in_progress -> submitted.

Answers can only be written while the attempt is open. Submission is a
one-way conditional update and triggers evaluation.
"""
import logging

from django.utils import timezone

from exams.language import ENGLISH, HINDI, SUPPORTED_LANGUAGES, participating_sections, resolve_questions
from exams.models import Exam, Question
from payments.models import Transaction
from ..answers import has_answer_value, normalize_answer
from ..exceptions import ConflictError, ExamValidationError, NotFoundError, PaymentRequiredError
from ..models import ExamAttempt, UserAnswer
from .evaluation import evaluate_attempt, load_exam_questions

logger = logging.getLogger(__name__)


def _get_open_exam(exam_id):
    exam = Exam.objects.filter(id=exam_id, is_published=True, deleted_at__isnull=True).first()
    if exam is None:
        raise NotFoundError("Exam not found")
    return exam


def _get_owned_attempt(attempt_id, user, **filters):
    attempt = (
        ExamAttempt.objects
        .select_related('exam')
        .filter(id=attempt_id, user=user, **filters)
        .first()
    )
    if attempt is None:
        raise NotFoundError("Exam attempt not found")
    return attempt


def check_exam_window(exam, now=None):
    if exam.allow_anytime:
        return
    if exam.status != Exam.Status.ONGOING:
        raise ExamValidationError("Exam is not currently available")

    now = now or timezone.now()
    if (exam.start_date and exam.start_date > now) or (exam.end_date and exam.end_date < now):
        raise ExamValidationError("Exam is not within the allowed time window")


def start_attempt(exam_id, user, language=ENGLISH, ip_address=None, user_agent=""):
    exam = _get_open_exam(exam_id)
    check_exam_window(exam)

    if language not in SUPPORTED_LANGUAGES:
        raise ExamValidationError('Invalid language. Must be "en" or "hi"')
    if language == HINDI and not exam.supports_hindi:
        raise ExamValidationError("Hindi language not supported for this exam")

    if not exam.is_free and not Transaction.has_paid(user, exam):
        raise PaymentRequiredError()

    attempt = ExamAttempt.objects.create(
        user=user,
        exam=exam,
        language=language,
        ip_address=ip_address,
        user_agent=(user_agent or "")[:255],
    )
    logger.info("User %s started attempt %s on exam %s (%s)", user.pk, attempt.id, exam.id, language)
    return attempt


def get_attempt_questions(exam_id, attempt_id, user):
    """
    Language-resolved question set for an open attempt, grouped by
    participating section, with the user's saved answers attached.
    """
    attempt = _get_owned_attempt(attempt_id, user, exam_id=exam_id)
    if attempt.is_submitted:
        raise ConflictError("Exam already submitted")

    questions = load_exam_questions(exam_id)
    selection = resolve_questions(questions, attempt.language or ENGLISH)
    if selection.fell_back:
        logger.info("Attempt %s served in %s instead of %s", attempt.id, selection.language, attempt.language)

    saved = {answer.question_id: answer for answer in attempt.answers.all()}
    for question in selection.questions:
        question.user_answer = saved.get(question.id)

    grouped = {}
    for question in selection.questions:
        grouped.setdefault(question.section_id, []).append(question)

    sections = []
    for section in participating_sections(attempt.exam.sections.all(), selection.language):
        section_questions = grouped.get(section.id)
        if not section_questions:
            continue
        section.served_questions = section_questions
        sections.append(section)

    return {
        "attempt": attempt,
        "language": selection.language,
        "sections": sections,
        "questions": selection.questions,
    }


def save_answer(attempt_id, question_id, user, value=None, marked_for_review=False, time_taken=0):
    """
    Upsert one answer. Rows exist only while they carry a value or a review
    mark; saving the same content again leaves exactly one row.
    """
    attempt = _get_owned_attempt(attempt_id, user)
    if attempt.is_submitted:
        raise ConflictError("Cannot save answer after exam submission")

    question = Question.objects.filter(id=question_id, exam_id=attempt.exam_id, deleted_at__isnull=True).first()
    if question is None:
        raise NotFoundError("Question not found")

    value = normalize_answer(question.type, value)
    has_value = has_answer_value(value)
    is_marked = bool(marked_for_review)

    if not has_value and not is_marked:
        UserAnswer.objects.filter(attempt=attempt, question=question).delete()
        return None

    # Last write wins for concurrent saves of the same question
    answer, _ = UserAnswer.objects.update_or_create(
        attempt=attempt,
        question=question,
        defaults={
            'answer': value if has_value else None,
            'marked_for_review': is_marked,
            'time_taken': time_taken or 0,
        },
    )
    return answer


def submit_attempt(attempt_id, user, cache):
    attempt = _get_owned_attempt(attempt_id, user)
    if attempt.is_submitted:
        raise ConflictError("Exam already submitted")

    submitted_at = timezone.now()
    time_taken = max(int((submitted_at - attempt.started_at).total_seconds()), 0)

    # Conditional update so two concurrent submits cannot both pass
    updated = ExamAttempt.objects.filter(id=attempt.id, is_submitted=False).update(
        is_submitted=True,
        submitted_at=submitted_at,
        time_taken=time_taken,
    )
    if updated == 0:
        raise ConflictError("Exam already submitted")

    attempt.is_submitted = True
    attempt.submitted_at = submitted_at
    attempt.time_taken = time_taken
    logger.info("Attempt %s submitted after %ss", attempt.id, time_taken)

    try:
        result = evaluate_attempt(attempt, cache)
    except Exception:
        # Submission stands; evaluate_pending_attempts picks this attempt up later
        logger.exception("Evaluation failed for submitted attempt %s", attempt.id)
        raise
    return attempt, result
