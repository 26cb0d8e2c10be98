# exam_platform/exams/serializers.py
from rest_framework import serializers
from .models import Exam, ExamSection


class ExamSectionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExamSection
        fields = ['id', 'name', 'name_hi', 'total_questions', 'marks_per_question', 'duration', 'section_order', 'language']


class ExamDetailSerializer(serializers.ModelSerializer):
    """Detailed view for candidates: exam metadata plus its marking pattern."""
    pattern = serializers.SerializerMethodField()
    attempts = serializers.SerializerMethodField()

    class Meta:
        model = Exam
        fields = [
            'id', 'title', 'description', 'category', 'duration', 'total_marks',
            'total_questions', 'pass_percentage', 'status', 'start_date', 'end_date',
            'allow_anytime', 'supports_hindi', 'is_free', 'price', 'pattern', 'attempts',
        ]

    def get_pattern(self, obj):
        return {
            'sections': ExamSectionSerializer(obj.sections.all(), many=True).data,
            'negative_marking': obj.negative_marking,
            'negative_mark_value': obj.negative_mark_value,
        }

    def get_attempts(self, obj):
        user = self.context.get('user')
        if user is None or not user.is_authenticated:
            return None
        return obj.attempts.filter(user=user).count()
