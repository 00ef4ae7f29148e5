# in projects/urls.py

from django.urls import path
from .views import (
    ProjectListCreateAPIView,
    ProjectDetailAPIView,
    ProjectTaskListAPIView,
    ProjectRecalculateAPIView,
    TaskListCreateAPIView,
    TaskDetailAPIView,
)

app_name = 'projects'

urlpatterns = [
    # /api/v1/projects/
    path('projects/', ProjectListCreateAPIView.as_view(), name='project-list-create'),

    # The <uuid:pk> path converter ensures that only valid UUIDs are accepted.
    path('projects/<uuid:pk>/', ProjectDetailAPIView.as_view(), name='project-detail'),
    path('projects/<uuid:project_id>/tasks/', ProjectTaskListAPIView.as_view(), name='project-task-list'),
    path('projects/<uuid:pk>/recalculate/', ProjectRecalculateAPIView.as_view(), name='project-recalculate'),

    # /api/v1/tasks/
    path('tasks/', TaskListCreateAPIView.as_view(), name='task-list-create'),
    path('tasks/<uuid:pk>/', TaskDetailAPIView.as_view(), name='task-detail'),
]
