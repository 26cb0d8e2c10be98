from rest_framework import serializers

from exams.language import (
    ENGLISH, localized_explanation, localized_option_text, localized_section_name, localized_text,
)
from exams.models import Question
from .models import ExamAttempt, UserAnswer, Result, SectionAnalysis


# --- Request payloads ---

class StartAttemptSerializer(serializers.Serializer):
    # Membership is checked by the attempt service so the error message stays explicit
    language = serializers.CharField(required=False, default=ENGLISH)


class SaveAnswerSerializer(serializers.Serializer):
    answer = serializers.JSONField(required=False, allow_null=True, default=None)
    marked_for_review = serializers.BooleanField(required=False, default=False)
    time_taken = serializers.IntegerField(required=False, min_value=0, default=0)

    def to_internal_value(self, data):
        # Accept the camelCase keys older clients send
        if hasattr(data, 'copy'):
            data = data.copy()
            for camel, snake in (('markedForReview', 'marked_for_review'), ('timeTaken', 'time_taken')):
                if camel in data and snake not in data:
                    data[snake] = data[camel]
        return super().to_internal_value(data)


# --- Attempt (candidate view, never exposes correctness) ---

class AttemptStartedSerializer(serializers.ModelSerializer):
    attempt_id = serializers.UUIDField(source='id', read_only=True)

    class Meta:
        model = ExamAttempt
        fields = ['attempt_id', 'started_at', 'language']


class SavedAnswerSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserAnswer
        fields = ['question_id', 'answer', 'marked_for_review', 'time_taken']


class AttemptOptionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    option_text = serializers.CharField()
    option_text_hi = serializers.CharField()
    option_order = serializers.IntegerField()


class AttemptQuestionSerializer(serializers.ModelSerializer):
    options = AttemptOptionSerializer(many=True, read_only=True)
    user_answer = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = [
            'id', 'section_id', 'type', 'text', 'text_hi', 'marks', 'negative_marks',
            'question_number', 'options', 'user_answer',
        ]

    def get_user_answer(self, obj):
        answer = getattr(obj, 'user_answer', None)
        if answer is None:
            return None
        return SavedAnswerSerializer(answer).data


class AttemptSectionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    name_hi = serializers.CharField(allow_blank=True)
    language = serializers.SerializerMethodField()
    total_questions = serializers.SerializerMethodField()
    marks_per_question = serializers.FloatField()
    duration = serializers.IntegerField(allow_null=True)
    section_order = serializers.IntegerField()
    questions = serializers.SerializerMethodField()

    def get_language(self, obj):
        return obj.language or self.context.get('language', ENGLISH)

    def get_total_questions(self, obj):
        return len(obj.served_questions)

    def get_questions(self, obj):
        return AttemptQuestionSerializer(obj.served_questions, many=True).data


# --- Results ---

class SectionAnalysisSerializer(serializers.ModelSerializer):
    section_id = serializers.UUIDField(read_only=True)
    section_name = serializers.SerializerMethodField()

    class Meta:
        model = SectionAnalysis
        fields = [
            'section_id', 'section_name', 'score', 'total_marks', 'correct_answers',
            'wrong_answers', 'unattempted', 'accuracy', 'time_taken',
        ]

    def get_section_name(self, obj):
        return localized_section_name(obj.section, self.context.get('language', ENGLISH))


class ResultSerializer(serializers.ModelSerializer):
    """Lightweight serializer for result lists."""
    attempt_id = serializers.UUIDField(read_only=True)
    exam_id = serializers.UUIDField(read_only=True)
    exam_title = serializers.CharField(source='exam.title', read_only=True)
    language = serializers.CharField(source='attempt.language', read_only=True)

    class Meta:
        model = Result
        fields = [
            'id', 'attempt_id', 'exam_id', 'exam_title', 'language', 'score', 'total_marks',
            'percentage', 'correct_answers', 'wrong_answers', 'unattempted', 'time_taken',
            'status', 'created_at',
        ]


class ResultDetailSerializer(ResultSerializer):
    exam = serializers.SerializerMethodField()
    section_wise_analysis = serializers.SerializerMethodField()

    class Meta(ResultSerializer.Meta):
        fields = ResultSerializer.Meta.fields + ['exam', 'section_wise_analysis']

    def get_exam(self, obj):
        exam = obj.exam
        return {
            'id': str(exam.id),
            'title': exam.title,
            'description': exam.description,
            'category': exam.category,
            'pass_percentage': exam.pass_percentage,
            'total_questions': exam.total_questions,
        }

    def get_section_wise_analysis(self, obj):
        analyses = obj.section_analyses.select_related('section')
        return SectionAnalysisSerializer(analyses, many=True, context={'language': obj.attempt.language}).data


class ReviewQuestionSerializer(serializers.Serializer):
    """Graded question with the candidate's answer, localized to the attempt language."""

    def to_representation(self, question):
        language = self.context.get('language', ENGLISH)
        answer = self.context.get('answers', {}).get(question.id)
        options = list(question.options.all())
        correct = [str(option.id) for option in options if option.is_correct]

        return {
            'id': str(question.id),
            'section_id': str(question.section_id),
            'section_name': localized_section_name(question.section, language),
            'type': question.type,
            'text': localized_text(question, language),
            'explanation': localized_explanation(question, language),
            'marks': question.marks,
            'negative_marks': question.negative_marks,
            'options': [
                {
                    'id': str(option.id),
                    'option_text': localized_option_text(option, language),
                    'option_order': option.option_order,
                    'is_correct': option.is_correct,
                }
                for option in options
            ],
            'correct_answer': correct if question.type == Question.QuestionType.MULTIPLE else (correct[0] if correct else None),
            'user_answer': answer.answer if answer else None,
            'is_correct': bool(answer.is_correct) if answer else False,
            'marks_obtained': (answer.marks_obtained or 0) if answer else 0,
            'time_taken': answer.time_taken if answer else 0,
        }
