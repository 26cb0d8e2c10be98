# assessments/models.py
import uuid

from django.db import models
from django.conf import settings
from django.utils import timezone
from exams.models import Exam, ExamSection, Question


class ExamAttempt(models.Model):
    """Tracks a candidate's specific attempt at an exam."""

    class State(models.TextChoices):
        CREATED = "created", "Created"
        IN_PROGRESS = "in_progress", "In Progress"
        SUBMITTED = "submitted", "Submitted"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='exam_attempts', on_delete=models.CASCADE)
    exam = models.ForeignKey(Exam, related_name='attempts', on_delete=models.CASCADE)

    # Fixed at creation for the lifetime of the attempt
    language = models.CharField(max_length=2, default="en")

    started_at = models.DateTimeField(default=timezone.now)
    submitted_at = models.DateTimeField(null=True, blank=True)
    is_submitted = models.BooleanField(default=False)
    time_taken = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds from start to submit")

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ['-started_at']

    def __str__(self):
        return f"{self.user} - {self.exam.title}"

    @property
    def state(self):
        if self.is_submitted:
            return self.State.SUBMITTED
        if self.answers.exists():
            return self.State.IN_PROGRESS
        return self.State.CREATED


class UserAnswer(models.Model):
    attempt = models.ForeignKey(ExamAttempt, related_name='answers', on_delete=models.CASCADE)
    question = models.ForeignKey(Question, related_name='user_answers', on_delete=models.CASCADE)

    # Scalar option id, list of option ids, or numeric string depending on question type
    answer = models.JSONField(null=True, blank=True)
    marked_for_review = models.BooleanField(default=False)
    time_taken = models.PositiveIntegerField(default=0)

    # Filled in by evaluation
    is_correct = models.BooleanField(null=True)
    marks_obtained = models.FloatField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['attempt', 'question'], name='unique_answer_per_attempt_question'),
        ]

    def __str__(self):
        return f"{self.attempt_id} / {self.question_id}"


class Result(models.Model):
    class Status(models.TextChoices):
        PASS = "pass", "Pass"
        FAIL = "fail", "Fail"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    attempt = models.OneToOneField(ExamAttempt, related_name='result', on_delete=models.CASCADE)
    exam = models.ForeignKey(Exam, related_name='results', on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name='exam_results', on_delete=models.CASCADE)

    score = models.FloatField(default=0)
    total_marks = models.FloatField(default=0)
    percentage = models.FloatField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    wrong_answers = models.PositiveIntegerField(default=0)
    unattempted = models.PositiveIntegerField(default=0)
    time_taken = models.PositiveIntegerField(null=True, blank=True)

    status = models.CharField(max_length=10, choices=Status.choices)
    is_published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.attempt} - {self.score}/{self.total_marks}"


class SectionAnalysis(models.Model):
    result = models.ForeignKey(Result, related_name='section_analyses', on_delete=models.CASCADE)
    section = models.ForeignKey(ExamSection, related_name='analyses', on_delete=models.CASCADE)

    score = models.FloatField(default=0)
    total_marks = models.FloatField(default=0)
    correct_answers = models.PositiveIntegerField(default=0)
    wrong_answers = models.PositiveIntegerField(default=0)
    unattempted = models.PositiveIntegerField(default=0)
    accuracy = models.FloatField(default=0)
    time_taken = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['section__section_order']
        constraints = [
            models.UniqueConstraint(fields=['result', 'section'], name='unique_analysis_per_result_section'),
        ]
