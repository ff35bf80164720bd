"""
URL configuration for config project.
"""
from django.urls import path, include

urlpatterns = [
    path('api/', include('interviews.urls')),
]
