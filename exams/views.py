import logging

from rest_framework import permissions, views
from rest_framework.response import Response

from assessments.exceptions import NotFoundError
from cores.cache import exam_detail_key, exam_detail_prefix, get_exam_cache
from .models import Exam
from .serializers import ExamDetailSerializer

logger = logging.getLogger(__name__)


class ExamDetailView(views.APIView):
    """
    Published exam with its section pattern and the caller's attempt count.
    Served through the short-lived exam cache; submissions invalidate it.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):
        cache = get_exam_cache()
        user = request.user if request.user.is_authenticated else None
        version = cache.version(exam_detail_prefix(pk))
        key = exam_detail_key(pk, user.pk if user else None, version)

        data = cache.get(key)
        if data is not None:
            return Response(data)

        exam = Exam.objects.filter(id=pk, is_published=True, deleted_at__isnull=True).first()
        if exam is None:
            raise NotFoundError("Exam not found")

        data = ExamDetailSerializer(exam, context={'user': user}).data
        cache.set(key, data)
        logger.debug("Cached exam detail %s", key)
        return Response(data)
