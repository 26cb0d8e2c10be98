# assessments/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class ExamValidationError(APIException):
    """Bad input or a precondition failed. Nothing was written."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation error"
    default_code = "validation_error"


class PaymentRequiredError(ExamValidationError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Payment required to access this exam"
    default_code = "payment_required"


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
    default_code = "not_found"


class ConflictError(APIException):
    """The attempt has already moved past the state the operation needs."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Exam already submitted"
    default_code = "already_submitted"


class EvaluationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to evaluate exam"
    default_code = "evaluation_failed"
