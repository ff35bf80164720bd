import django.core.validators
import django.db.models.deletion
import interviews.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Interview",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("interview_id", models.CharField(default=interviews.models.generate_interview_id, editable=False, max_length=50, unique=True)),
                ("interviewee_name", models.CharField(max_length=255)),
                ("role", models.CharField(max_length=255)),
                ("technologies", models.JSONField(blank=True, default=list)),
                ("interview_time", models.DateTimeField()),
                ("status", models.CharField(choices=[("scheduled", "scheduled"), ("in_progress", "in progress"), ("completed", "completed"), ("cancelled", "cancelled")], default="scheduled", max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["interview_time"],
                "indexes": [models.Index(fields=["interview_time"], name="interview_time_idx")],
            },
        ),
        migrations.CreateModel(
            name="InterviewQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("question_text", models.TextField()),
                ("question_type", models.CharField(choices=[("technical", "technical"), ("problem-solving", "problem-solving"), ("experience", "experience")], default="technical", max_length=100)),
                ("difficulty_level", models.CharField(choices=[("easy", "easy"), ("medium", "medium"), ("hard", "hard")], default="medium", max_length=50)),
                ("expected_answer", models.TextField(blank=True, default="")),
                ("answer_text", models.TextField(blank=True, null=True)),
                ("score", models.IntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(10)])),
                ("feedback", models.TextField(blank=True, default="")),
                ("answered_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("interview", models.ForeignKey(db_column="interview_id", on_delete=django.db.models.deletion.CASCADE, related_name="questions", to="interviews.interview", to_field="interview_id")),
            ],
            options={
                "ordering": ["created_at", "id"],
                "indexes": [models.Index(fields=["answered_at"], name="question_answered_at_idx")],
            },
        ),
    ]
