# exam_platform/exams/models.py
import uuid

from django.db import models


class Exam(models.Model):
    class Status(models.TextChoices):
        UPCOMING = "upcoming", "Upcoming"
        ONGOING = "ongoing", "Ongoing"
        COMPLETED = "completed", "Completed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)

    duration = models.PositiveIntegerField(help_text="Duration in minutes")
    total_marks = models.FloatField(default=0)
    total_questions = models.PositiveIntegerField(default=0)
    pass_percentage = models.FloatField(default=40)

    negative_marking = models.BooleanField(default=False)
    negative_mark_value = models.FloatField(default=0)

    # Window is only enforced when allow_anytime is off
    allow_anytime = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.UPCOMING)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)

    supports_hindi = models.BooleanField(default=False)

    is_free = models.BooleanField(default=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0.00)

    is_published = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title


class ExamSection(models.Model):
    class Language(models.TextChoices):
        ENGLISH = "en", "English"
        HINDI = "hi", "Hindi"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    exam = models.ForeignKey(Exam, related_name='sections', on_delete=models.CASCADE)
    name = models.CharField(max_length=255)
    name_hi = models.CharField(max_length=255, blank=True)

    total_questions = models.PositiveIntegerField(default=0)
    marks_per_question = models.FloatField(default=1)
    duration = models.PositiveIntegerField(null=True, blank=True)
    section_order = models.PositiveIntegerField(default=0)

    # Blank means untagged: the section follows the attempt's language
    language = models.CharField(max_length=2, choices=Language.choices, blank=True)

    class Meta:
        ordering = ['section_order']

    def __str__(self):
        return f"{self.exam} / {self.name}"


class Question(models.Model):
    class QuestionType(models.TextChoices):
        SINGLE = "single", "Single Choice"
        MULTIPLE = "multiple", "Multiple Choice"
        TRUEFALSE = "truefalse", "True / False"
        NUMERICAL = "numerical", "Numerical"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    exam = models.ForeignKey(Exam, related_name='questions', on_delete=models.CASCADE)
    section = models.ForeignKey(ExamSection, related_name='questions', on_delete=models.CASCADE)
    type = models.CharField(max_length=20, choices=QuestionType.choices, default=QuestionType.SINGLE)

    # Primary (English) and secondary (Hindi) content
    text = models.TextField(blank=True)
    text_hi = models.TextField(blank=True)
    explanation = models.TextField(blank=True)
    explanation_hi = models.TextField(blank=True)

    question_number = models.PositiveIntegerField(default=0)
    marks = models.FloatField(default=1)
    negative_marks = models.FloatField(default=0, help_text="Magnitude subtracted on a wrong answer")

    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['question_number']

    def __str__(self):
        return f"{(self.text or self.text_hi)[:50]}..."


class QuestionOption(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    question = models.ForeignKey(Question, related_name='options', on_delete=models.CASCADE)
    option_text = models.TextField(blank=True)
    option_text_hi = models.TextField(blank=True)
    option_order = models.PositiveIntegerField(default=0)
    is_correct = models.BooleanField(default=False)

    class Meta:
        ordering = ['option_order']

    def __str__(self):
        return self.option_text or self.option_text_hi
