from django.contrib import admin

# Register your models here.
from .models import Exam, ExamSection, Question, QuestionOption


class QuestionOptionInline(admin.TabularInline):
    model = QuestionOption
    extra = 0


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ('title', 'status', 'is_published', 'allow_anytime', 'supports_hindi', 'is_free')
    list_filter = ('status', 'is_published', 'supports_hindi')


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ('__str__', 'exam', 'section', 'type', 'marks', 'negative_marks')
    list_filter = ('type',)
    inlines = [QuestionOptionInline]


admin.site.register(ExamSection)
