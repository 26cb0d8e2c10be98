from django.contrib import admin

from .models import ExamAttempt, Result, SectionAnalysis


class SectionAnalysisInline(admin.TabularInline):
    model = SectionAnalysis
    extra = 0
    can_delete = False


@admin.register(ExamAttempt)
class ExamAttemptAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'exam', 'language', 'started_at', 'is_submitted')
    list_filter = ('is_submitted', 'language')


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ('attempt', 'exam', 'user', 'score', 'total_marks', 'percentage', 'status')
    list_filter = ('status',)
    inlines = [SectionAnalysisInline]
