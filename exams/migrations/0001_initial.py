import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Exam',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(blank=True, max_length=100)),
                ('duration', models.PositiveIntegerField(help_text='Duration in minutes')),
                ('total_marks', models.FloatField(default=0)),
                ('total_questions', models.PositiveIntegerField(default=0)),
                ('pass_percentage', models.FloatField(default=40)),
                ('negative_marking', models.BooleanField(default=False)),
                ('negative_mark_value', models.FloatField(default=0)),
                ('allow_anytime', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('upcoming', 'Upcoming'), ('ongoing', 'Ongoing'), ('completed', 'Completed')], default='upcoming', max_length=20)),
                ('start_date', models.DateTimeField(blank=True, null=True)),
                ('end_date', models.DateTimeField(blank=True, null=True)),
                ('supports_hindi', models.BooleanField(default=False)),
                ('is_free', models.BooleanField(default=True)),
                ('price', models.DecimalField(decimal_places=2, default=0.0, max_digits=10)),
                ('is_published', models.BooleanField(default=False)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='ExamSection',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('name_hi', models.CharField(blank=True, max_length=255)),
                ('total_questions', models.PositiveIntegerField(default=0)),
                ('marks_per_question', models.FloatField(default=1)),
                ('duration', models.PositiveIntegerField(blank=True, null=True)),
                ('section_order', models.PositiveIntegerField(default=0)),
                ('language', models.CharField(blank=True, choices=[('en', 'English'), ('hi', 'Hindi')], max_length=2)),
                ('exam', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sections', to='exams.exam')),
            ],
            options={
                'ordering': ['section_order'],
            },
        ),
        migrations.CreateModel(
            name='Question',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('single', 'Single Choice'), ('multiple', 'Multiple Choice'), ('truefalse', 'True / False'), ('numerical', 'Numerical')], default='single', max_length=20)),
                ('text', models.TextField(blank=True)),
                ('text_hi', models.TextField(blank=True)),
                ('explanation', models.TextField(blank=True)),
                ('explanation_hi', models.TextField(blank=True)),
                ('question_number', models.PositiveIntegerField(default=0)),
                ('marks', models.FloatField(default=1)),
                ('negative_marks', models.FloatField(default=0, help_text='Magnitude subtracted on a wrong answer')),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('exam', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='exams.exam')),
                ('section', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to='exams.examsection')),
            ],
            options={
                'ordering': ['question_number'],
            },
        ),
        migrations.CreateModel(
            name='QuestionOption',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('option_text', models.TextField(blank=True)),
                ('option_text_hi', models.TextField(blank=True)),
                ('option_order', models.PositiveIntegerField(default=0)),
                ('is_correct', models.BooleanField(default=False)),
                ('question', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='options', to='exams.question')),
            ],
            options={
                'ordering': ['option_order'],
            },
        ),
    ]
