# payments/models.py
from django.db import models
from django.conf import settings
from exams.models import Exam

class Transaction(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        SUCCESS = "success", "Success"
        FAILED = "failed", "Failed"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    exam = models.ForeignKey(Exam, related_name='transactions', on_delete=models.CASCADE)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    reference = models.CharField(max_length=100, unique=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} - {self.exam} - {self.status}"

    @classmethod
    def has_paid(cls, user, exam):
        """True when the user holds a successful payment record for the exam."""
        return cls.objects.filter(user=user, exam=exam, status=cls.Status.SUCCESS).exists()
