from django.urls import path
from .views import ExamDetailView

urlpatterns = [
    path('<uuid:pk>/', ExamDetailView.as_view(), name='exam-detail'),
]
