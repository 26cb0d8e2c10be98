from rest_framework import generics, permissions, status, views
from rest_framework.response import Response

from cores.cache import get_exam_cache
from .exceptions import NotFoundError
from .models import Result
from .serializers import (
    AttemptQuestionSerializer, AttemptSectionSerializer, AttemptStartedSerializer,
    ResultDetailSerializer, ResultSerializer, ReviewQuestionSerializer,
    SaveAnswerSerializer, StartAttemptSerializer,
)
from .services import get_attempt_questions, save_answer, start_attempt, submit_attempt
from .services.evaluation import graded_question_set, load_exam_questions


def _client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


# --- STUDENT EXAM FLOW ---

class StartExamView(views.APIView):
    """Student starts an exam. Creates an attempt in the requested language."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, exam_id):
        serializer = StartAttemptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        attempt = start_attempt(
            exam_id,
            request.user,
            language=serializer.validated_data['language'],
            ip_address=_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
        )
        return Response(AttemptStartedSerializer(attempt).data, status=status.HTTP_201_CREATED)


class ExamQuestionsView(views.APIView):
    """Questions for an open attempt, resolved to the attempt's language, with saved answers."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id, attempt_id):
        served = get_attempt_questions(exam_id, attempt_id, request.user)
        context = {'language': served['language']}
        return Response({
            "language": served['language'],
            "sections": AttemptSectionSerializer(served['sections'], many=True, context=context).data,
            "questions": AttemptQuestionSerializer(served['questions'], many=True, context=context).data,
        })


class SaveAnswerView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, attempt_id, question_id):
        serializer = SaveAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        save_answer(
            attempt_id,
            question_id,
            request.user,
            value=data['answer'],
            marked_for_review=data['marked_for_review'],
            time_taken=data['time_taken'],
        )
        return Response({"status": "Answer saved successfully"})

    post = put


class SubmitExamView(views.APIView):
    """Student submits the attempt. Scoring runs immediately."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, attempt_id):
        attempt, result = submit_attempt(attempt_id, request.user, get_exam_cache())
        return Response({
            "status": "Exam submitted successfully",
            "attempt_id": attempt.id,
            "submitted_at": attempt.submitted_at,
            "result_id": result.id,
        })


# --- RESULTS ---

def _user_results(user):
    return Result.objects.filter(user=user, is_published=True).select_related('exam', 'attempt')


class ResultListView(generics.ListAPIView):
    """Published results of the logged-in student, newest first."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ResultSerializer

    def get_queryset(self):
        return _user_results(self.request.user).order_by('-created_at')


class ResultStatsView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        results = list(_user_results(request.user).values_list('percentage', 'created_at'))
        exams_taken = len(results)
        days_active = len({created_at.date() for _, created_at in results if created_at})
        avg_score = round(sum(p or 0 for p, _ in results) / exams_taken, 1) if exams_taken else 0

        return Response({
            "exams_taken": exams_taken,
            "days_active": days_active,
            "avg_score": avg_score,
        })


class ResultByAttemptView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, attempt_id):
        result = Result.objects.filter(user=request.user, attempt_id=attempt_id).select_related('exam', 'attempt').first()
        if result is None:
            raise NotFoundError("Result not found")
        return Response(ResultDetailSerializer(result).data)


class ResultDetailView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, pk):
        results = Result.objects.filter(user=request.user).select_related('exam', 'attempt')
        # Older links carry the attempt id instead of the result id
        result = results.filter(id=pk).first() or results.filter(attempt_id=pk).first()
        if result is None:
            raise NotFoundError("Result not found")
        return Response(ResultDetailSerializer(result).data)


class AnswerReviewView(views.APIView):
    """Question-by-question review of a published result."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, result_id):
        result = Result.objects.filter(id=result_id, user=request.user).select_related('exam', 'attempt').first()
        if result is None:
            raise NotFoundError("Result not found")

        attempt = result.attempt
        language, _, graded = graded_question_set(result.exam, load_exam_questions(result.exam_id), attempt.language)
        answers = {answer.question_id: answer for answer in attempt.answers.all()}

        serializer = ReviewQuestionSerializer(
            graded, many=True, context={'language': language, 'answers': answers},
        )
        return Response(serializer.data)
