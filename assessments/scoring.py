# assessments/scoring.py
"""
Pure scoring: (question, correct options, submitted answer) -> correctness and marks,
aggregated into result totals and a per-section breakdown. No database access.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from exams.models import Question
from .answers import as_option_list, has_answer_value, parse_number

QuestionType = Question.QuestionType

PASS = "pass"
FAIL = "fail"


@dataclass(frozen=True)
class GradableQuestion:
    id: Any
    section_id: Any
    type: str
    marks: float
    negative_marks: float = 0.0
    correct_option_ids: tuple = ()
    # Numerical questions keep the expected value in the correct option's text
    correct_value: Optional[str] = None


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: Any
    value: Any = None
    time_taken: int = 0
    answer_id: Any = None


@dataclass
class GradedAnswer:
    question_id: Any
    answer_id: Any
    is_correct: bool
    marks_obtained: float


@dataclass
class SectionScore:
    section_id: Any
    total_marks: float = 0.0
    total_questions: int = 0
    score: float = 0.0
    correct: int = 0
    wrong: int = 0
    unattempted: int = 0
    time_taken: int = 0

    @property
    def accuracy(self):
        attempted = self.correct + self.wrong
        return (self.correct / attempted) * 100 if attempted else 0.0


@dataclass
class Evaluation:
    score: float = 0.0
    total_marks: float = 0.0
    correct: int = 0
    wrong: int = 0
    unattempted: int = 0
    percentage: float = 0.0
    status: str = FAIL
    sections: Dict[Any, SectionScore] = field(default_factory=dict)
    graded_answers: List[GradedAnswer] = field(default_factory=list)


def _grade_choice(question, value):
    return str(value) in {str(option_id) for option_id in question.correct_option_ids}


def _grade_multiple(question, value):
    submitted = [str(item) for item in as_option_list(value)]
    expected = {str(option_id) for option_id in question.correct_option_ids}
    return len(submitted) == len(expected) and set(submitted) == expected


def _grade_numerical(question, value):
    submitted = parse_number(value)
    expected = parse_number(question.correct_value)
    if submitted is None or expected is None:
        return False
    return submitted == expected


_GRADERS = {
    QuestionType.SINGLE.value: _grade_choice,
    QuestionType.TRUEFALSE.value: _grade_choice,
    QuestionType.MULTIPLE.value: _grade_multiple,
    QuestionType.NUMERICAL.value: _grade_numerical,
}


def is_answer_correct(question: GradableQuestion, value) -> bool:
    try:
        grader = _GRADERS[str(question.type)]
    except KeyError:
        raise ValueError(f"Unknown question type: {question.type!r}")
    return grader(question, value)


def marks_for(question: GradableQuestion, value):
    """(is_correct, marks) for one question; unattempted answers score zero."""
    if not has_answer_value(value):
        return False, 0.0
    if is_answer_correct(question, value):
        return True, float(question.marks)
    return False, -float(question.negative_marks or 0)


def score_attempt(questions, answers, pass_percentage) -> Evaluation:
    """
    Grade every question in a single pass.

    ``answers`` maps question id -> SubmittedAnswer. Questions without an
    answer (or with an empty one) count as unattempted.
    """
    evaluation = Evaluation()

    for question in questions:
        section = evaluation.sections.get(question.section_id)
        if section is None:
            section = evaluation.sections[question.section_id] = SectionScore(section_id=question.section_id)
        section.total_marks += float(question.marks)
        section.total_questions += 1
        evaluation.total_marks += float(question.marks)

        answer = answers.get(question.id)
        if answer is not None:
            section.time_taken += answer.time_taken or 0

        if answer is None or not has_answer_value(answer.value):
            evaluation.unattempted += 1
            section.unattempted += 1
            if answer is not None:
                evaluation.graded_answers.append(
                    GradedAnswer(question.id, answer.answer_id, is_correct=False, marks_obtained=0.0)
                )
            continue

        is_correct, marks = marks_for(question, answer.value)
        evaluation.score += marks
        section.score += marks
        if is_correct:
            evaluation.correct += 1
            section.correct += 1
        else:
            evaluation.wrong += 1
            section.wrong += 1

        evaluation.graded_answers.append(
            GradedAnswer(question.id, answer.answer_id, is_correct=is_correct, marks_obtained=marks)
        )

    if evaluation.total_marks > 0:
        evaluation.percentage = (evaluation.score / evaluation.total_marks) * 100
    evaluation.status = PASS if evaluation.percentage >= float(pass_percentage) else FAIL
    return evaluation
