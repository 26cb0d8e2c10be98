from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone

from exams.models import Exam, ExamSection, Question, QuestionOption

User = get_user_model()


def make_user(username="candidate"):
    return User.objects.create_user(username=username, email=f"{username}@example.com", password="password123")


def make_exam(**overrides):
    fields = dict(
        title="General Aptitude Mock",
        duration=60,
        pass_percentage=40,
        allow_anytime=True,
        is_published=True,
        is_free=True,
        status=Exam.Status.ONGOING,
        start_date=timezone.now() - timedelta(days=1),
        end_date=timezone.now() + timedelta(days=1),
    )
    fields.update(overrides)
    return Exam.objects.create(**fields)


def make_section(exam, name="Quantitative", order=1, **overrides):
    return ExamSection.objects.create(exam=exam, name=name, section_order=order, **overrides)


def make_question(section, options=(), number=1, **overrides):
    """
    ``options`` is a sequence of (text, is_correct) or (text, text_hi, is_correct).
    Returns (question, [options]).
    """
    fields = dict(text=f"Question {number}", marks=1, negative_marks=0, type=Question.QuestionType.SINGLE)
    fields.update(overrides)
    question = Question.objects.create(exam=section.exam, section=section, question_number=number, **fields)

    created = []
    for order, row in enumerate(options, start=1):
        if len(row) == 3:
            text, text_hi, is_correct = row
        else:
            (text, is_correct), text_hi = row, ""
        created.append(QuestionOption.objects.create(
            question=question, option_text=text, option_text_hi=text_hi,
            option_order=order, is_correct=is_correct,
        ))
    return question, created
