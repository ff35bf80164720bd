import logging
from datetime import timedelta

from asgiref.sync import async_to_sync
from django.apps import apps
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .interviewer.exceptions import InterviewerError
from .models import Interview
from .serializers import (
    GenerateQuestionsQuerySerializer,
    InterviewQuestionSerializer,
    InterviewSerializer,
    SessionStatsSerializer,
    SubmitAnswerSerializer,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def envelope(data=None, message="", success=True, status_code=status.HTTP_200_OK, **extra):
    body = {"success": success, "message": message, "data": data}
    body.update(extra)
    return Response(body, status=status_code)


def envelope_exception_handler(exc, context):
    """REST_FRAMEWORK EXCEPTION_HANDLER: every error leaves in the {success, message, data} shape."""
    if isinstance(exc, InterviewerError):
        logger.info(f"{type(exc).__name__}: {exc.message}")
        return envelope(None, exc.message, success=False, status_code=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, ValidationError):
            return envelope(response.data, "Validation failed", success=False, status_code=response.status_code)
        detail = response.data.get("detail", str(exc)) if isinstance(response.data, dict) else str(exc)
        return envelope(None, str(detail), success=False, status_code=response.status_code)

    view = context.get("view")
    logger.error(f"Unhandled error in {type(view).__name__ if view else 'view'}: {exc}", exc_info=exc)
    return envelope(None, "Internal server error", success=False, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _sequencer():
    return apps.get_app_config("interviews").sequencer


class InterviewViewSet(viewsets.ModelViewSet):
    queryset = Interview.objects.all()
    serializer_class = InterviewSerializer
    lookup_field = 'interview_id'

    _messages = {
        'list': 'Interviews retrieved successfully',
        'retrieve': 'Interview retrieved successfully',
        'create': 'Interview scheduled successfully',
        'update': 'Interview updated successfully',
        'partial_update': 'Interview updated successfully',
        'today': 'Interviews retrieved successfully',
        'upcoming': 'Interviews retrieved successfully',
    }

    def get_queryset(self):
        qs = super().get_queryset()
        params = self.request.query_params
        if params.get('status'):
            qs = qs.filter(status=params['status'])
        if params.get('interviewee'):
            qs = qs.filter(interviewee_name__icontains=params['interviewee'])
        technology = params.get('technology')
        if technology:
            # JSON containment lookups differ between backends; filter in Python
            wanted = technology.lower()
            ids = [i.pk for i in qs if any(wanted in t.lower() for t in (i.technologies or []))]
            qs = qs.filter(pk__in=ids)
        return qs

    def finalize_response(self, request, response, *args, **kwargs):
        data = response.data
        if response.status_code < 400 and not (isinstance(data, dict) and 'success' in data):
            extra = {'count': len(data)} if isinstance(data, list) else {}
            response = envelope(data, self._messages.get(self.action, ''), status_code=response.status_code, **extra)
        return super().finalize_response(request, response, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        data = self.get_serializer(instance).data
        instance.delete()
        logger.info(f"Interview {data['interview_id']} deleted")
        return envelope(data, 'Interview deleted successfully')

    @action(detail=False, methods=['get'])
    def today(self, request):
        now = timezone.localtime()
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        qs = self.get_queryset().filter(interview_time__gte=start, interview_time__lt=start + timedelta(days=1))
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=False, methods=['get'])
    def upcoming(self, request):
        qs = self.get_queryset().filter(interview_time__gte=timezone.now(), status=Interview.Status.SCHEDULED)
        return Response(self.get_serializer(qs, many=True).data)


@api_view(['GET'])
def generate_question(request):
    """Next question of the session: 201 when newly created, 200 when a pending one is returned."""
    query = GenerateQuestionsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    interview_id = query.validated_data['interview_id']

    question, created = async_to_sync(_sequencer().request_next_question)(
        interview_id, query.validated_data.get('question_count')
    )
    data = InterviewQuestionSerializer(question).data
    if created:
        return envelope(data, 'Question generated successfully', status_code=status.HTTP_201_CREATED)
    return envelope(data, 'Pending question returned; answer it before requesting the next one')


@api_view(['POST'])
def submit_answer(request, question_id):
    payload = SubmitAnswerSerializer(data=request.data)
    payload.is_valid(raise_exception=True)
    question = async_to_sync(_sequencer().record_answer)(question_id, payload.validated_data['answer_text'])
    return envelope(InterviewQuestionSerializer(question).data, 'Answer submitted successfully')


@api_view(['GET'])
def interview_stats(request, interview_id):
    stats = async_to_sync(_sequencer().get_stats)(interview_id)
    data = SessionStatsSerializer({'interview_id': interview_id, **stats.as_dict()}).data
    return envelope(data, 'Interview statistics retrieved successfully')


@api_view(['GET'])
def questions_by_interview(request, interview_id):
    questions = async_to_sync(_sequencer().list_questions)(interview_id)
    data = InterviewQuestionSerializer(questions, many=True).data
    return envelope(data, 'Questions retrieved successfully', count=len(data))


@api_view(['GET'])
def question_detail(request, question_id):
    question = async_to_sync(_sequencer().get_question)(question_id)
    return envelope(InterviewQuestionSerializer(question).data, 'Question retrieved successfully')


@api_view(['GET'])
def health(request):
    return envelope(
        {'timestamp': timezone.now().isoformat(), 'version': API_VERSION},
        'InterviewMate API is running',
    )
