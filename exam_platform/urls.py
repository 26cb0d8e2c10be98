from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from assessments.urls import exam_urlpatterns, result_urlpatterns

urlpatterns = [
    path('admin/', admin.site.urls),

    # --- Authentication (tokens only; accounts are managed elsewhere) ---
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),

    # --- Exam taking ---
    path('api/exams/', include(exam_urlpatterns)),
    path('api/exams/', include('exams.urls')),

    # --- Results ---
    path('api/results/', include(result_urlpatterns)),
]
