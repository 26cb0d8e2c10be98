from django.urls import path
from .views import (
    StartExamView, ExamQuestionsView, SaveAnswerView, SubmitExamView,
    ResultListView, ResultStatsView, ResultByAttemptView, ResultDetailView, AnswerReviewView,
)

exam_urlpatterns = [
    # Student Exam Flow
    path('<uuid:exam_id>/start/', StartExamView.as_view(), name='start-exam'),
    path('<uuid:exam_id>/attempts/<uuid:attempt_id>/questions/', ExamQuestionsView.as_view(), name='attempt-questions'),
    path('attempts/<uuid:attempt_id>/questions/<uuid:question_id>/answer/', SaveAnswerView.as_view(), name='save-answer'),
    path('attempts/<uuid:attempt_id>/submit/', SubmitExamView.as_view(), name='submit-exam'),
]

result_urlpatterns = [
    path('', ResultListView.as_view(), name='result-list'),
    path('stats/', ResultStatsView.as_view(), name='result-stats'),
    path('attempt/<uuid:attempt_id>/', ResultByAttemptView.as_view(), name='result-by-attempt'),
    path('<uuid:pk>/', ResultDetailView.as_view(), name='result-detail'),
    path('<uuid:result_id>/review/', AnswerReviewView.as_view(), name='result-review'),
]
