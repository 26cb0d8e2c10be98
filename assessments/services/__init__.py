from .attempts import get_attempt_questions, save_answer, start_attempt, submit_attempt
from .evaluation import evaluate_attempt, evaluate_pending_attempts
from .publisher import ResultPublisher

__all__ = [
    "start_attempt",
    "get_attempt_questions",
    "save_answer",
    "submit_attempt",
    "evaluate_attempt",
    "evaluate_pending_attempts",
    "ResultPublisher",
]
