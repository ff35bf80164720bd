from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register(r'interviews', views.InterviewViewSet, basename='interview')

urlpatterns = [
    path('questions/generate/', views.generate_question, name='question-generate'),
    path('questions/answer/<int:question_id>/', views.submit_answer, name='question-answer'),
    path('questions/stats/<str:interview_id>/', views.interview_stats, name='question-stats'),
    path('questions/interview/<str:interview_id>/', views.questions_by_interview, name='questions-by-interview'),
    path('questions/<int:question_id>/', views.question_detail, name='question-detail'),
    path('health/', views.health, name='health'),
    path('', include(router.urls)),
]
