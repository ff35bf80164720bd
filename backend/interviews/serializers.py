from rest_framework import serializers

from .models import Interview, InterviewQuestion


class InterviewSerializer(serializers.ModelSerializer):
    technologies = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        allow_empty=True,
    )

    class Meta:
        model = Interview
        fields = [
            'interview_id', 'interviewee_name', 'role', 'technologies',
            'interview_time', 'status', 'created_at', 'updated_at',
        ]
        read_only_fields = ['interview_id', 'created_at', 'updated_at']


class InterviewQuestionSerializer(serializers.ModelSerializer):
    interview_id = serializers.ReadOnlyField()

    class Meta:
        model = InterviewQuestion
        fields = [
            'id', 'interview_id', 'question_text', 'question_type', 'difficulty_level',
            'expected_answer', 'answer_text', 'score', 'feedback', 'answered_at',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class GenerateQuestionsQuerySerializer(serializers.Serializer):
    interview_id = serializers.CharField(max_length=50)
    question_count = serializers.IntegerField(min_value=1, max_value=20, required=False)


class SubmitAnswerSerializer(serializers.Serializer):
    answer_text = serializers.CharField(min_length=10, max_length=2000)


class SessionStatsSerializer(serializers.Serializer):
    interview_id = serializers.CharField()
    total_questions = serializers.IntegerField()
    answered_questions = serializers.IntegerField()
    average_score = serializers.FloatField(allow_null=True)
    highest_score = serializers.IntegerField(allow_null=True)
    lowest_score = serializers.IntegerField(allow_null=True)
