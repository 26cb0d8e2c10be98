# assessments/services/publisher.py
import logging

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from cores.cache import exam_detail_prefix
from ..exceptions import ConflictError
from ..models import Result, SectionAnalysis, UserAnswer

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


def chunked(items, size):
    for start in range(0, len(items), size):
        yield items[start:start + size]


class ResultPublisher:
    """
    Persists an evaluation: the Result, its section analyses, then the
    per-answer grading in fixed-size batches. Cached exam details are
    invalidated once everything is written.
    """

    def __init__(self, cache, batch_size=None):
        self.cache = cache
        self.batch_size = batch_size or getattr(settings, 'ANSWER_UPDATE_BATCH_SIZE', DEFAULT_BATCH_SIZE)

    def publish(self, attempt, evaluation):
        try:
            with transaction.atomic():
                result = Result.objects.create(
                    attempt=attempt,
                    exam_id=attempt.exam_id,
                    user_id=attempt.user_id,
                    score=evaluation.score,
                    total_marks=evaluation.total_marks,
                    percentage=evaluation.percentage,
                    correct_answers=evaluation.correct,
                    wrong_answers=evaluation.wrong,
                    unattempted=evaluation.unattempted,
                    time_taken=attempt.time_taken,
                    status=evaluation.status,
                    is_published=True,
                )
                SectionAnalysis.objects.bulk_create([
                    SectionAnalysis(
                        result=result,
                        section_id=section.section_id,
                        score=section.score,
                        total_marks=section.total_marks,
                        correct_answers=section.correct,
                        wrong_answers=section.wrong,
                        unattempted=section.unattempted,
                        accuracy=section.accuracy,
                        time_taken=section.time_taken,
                    )
                    for section in evaluation.sections.values()
                    if section.total_questions > 0
                ])
        except IntegrityError:
            raise ConflictError("Exam already evaluated")

        failed = self._write_answer_grades(evaluation.graded_answers)
        if failed:
            logger.warning("Result %s published with %s ungraded answer rows", result.id, failed)

        self.cache.delete_by_prefix(exam_detail_prefix(attempt.exam_id))
        return result

    def _write_answer_grades(self, graded_answers):
        """Returns the number of answer rows whose batch failed to write."""
        rows = [
            UserAnswer(id=graded.answer_id, is_correct=graded.is_correct, marks_obtained=graded.marks_obtained)
            for graded in graded_answers
            if graded.answer_id is not None
        ]
        failed = 0
        for number, batch in enumerate(chunked(rows, self.batch_size), start=1):
            try:
                with transaction.atomic():
                    UserAnswer.objects.bulk_update(batch, ['is_correct', 'marks_obtained'])
            except DatabaseError:
                failed += len(batch)
                logger.exception("Answer grading batch %s (%s rows) failed", number, len(batch))
        return failed
