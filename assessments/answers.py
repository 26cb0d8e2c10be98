# assessments/answers.py
"""
Answer shapes keyed by question type.

    single / truefalse  -> one option id (string)
    multiple            -> list of option ids
    numerical           -> numeric string

Values are normalized when saved so evaluation never has to guess.
"""
import json
import math

from exams.models import Question
from .exceptions import ExamValidationError

QuestionType = Question.QuestionType


def has_answer_value(value):
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, str):
        return value.strip() != ""
    return bool(value)


def as_option_list(value):
    """Coerce a stored multiple-choice answer to a list, wrapping anything unparsable."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return [value]
        if isinstance(parsed, list):
            return parsed
    return [value]


def parse_number(value):
    """Float value of a numerical answer, or None when it is not a finite number."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _scalar_id(value):
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return str(value).strip()
    raise ExamValidationError("Answer must be a single option id")


def normalize_answer(question_type, value):
    """
    Validate a submitted value against the question type and return the
    shape stored on UserAnswer. Empty values normalize to None.
    """
    if question_type == QuestionType.NUMERICAL and isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)

    if not has_answer_value(value):
        return None

    if question_type in (QuestionType.SINGLE, QuestionType.TRUEFALSE):
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise ExamValidationError("Only one option can be selected for this question")
            value = value[0]
        return _scalar_id(value)

    if question_type == QuestionType.MULTIPLE:
        ids = []
        for item in as_option_list(value):
            option_id = _scalar_id(item)
            if option_id and option_id not in ids:
                ids.append(option_id)
        return ids or None

    if question_type == QuestionType.NUMERICAL:
        if parse_number(value) is None:
            raise ExamValidationError("Answer must be a number")
        return str(value).strip()

    raise ValueError(f"Unknown question type: {question_type!r}")
