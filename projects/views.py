import uuid

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .permissions import IsOwner
from .serializers import (
    ProjectSerializer,
    ProjectWriteSerializer,
    TaskSerializer,
    TaskCreateSerializer,
    TaskWriteSerializer,
)
from .services import ProjectService, TaskService


class ProjectListCreateAPIView(generics.ListCreateAPIView):
    """
    API view to retrieve a list of projects or create a new project.
    * GET: Returns a list of projects owned by the authenticated user.
    * POST: Creates a new draft project owned by the authenticated user.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ProjectWriteSerializer
        return ProjectSerializer

    def get_queryset(self):
        return ProjectService().list_projects(self.request.user.id)

    def create(self, request, *args, **kwargs):
        """
        Validates with the write serializer, responds with the full one.
        """
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        project = ProjectService().create_project(
            owner_id=request.user.id,
            name=write_serializer.validated_data['name'],
        )

        read_serializer = ProjectSerializer(project)
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)


class ProjectDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET, PUT/PATCH (rename) and DELETE for a single owned project.
    Deleting a project deletes all of its tasks.
    """
    permission_classes = [permissions.IsAuthenticated, IsOwner]
    serializer_class = ProjectSerializer

    def get_object(self):
        project = ProjectService().get_project(self.kwargs['pk'], self.request.user.id)
        self.check_object_permissions(self.request, project)
        return project

    def update(self, request, *args, **kwargs):
        project = self.get_object()
        write_serializer = ProjectWriteSerializer(project, data=request.data, partial=kwargs.get('partial', False))
        write_serializer.is_valid(raise_exception=True)

        service = ProjectService()
        name = write_serializer.validated_data.get('name', project.name)
        project = service.rename_project(project, name)
        return Response(ProjectSerializer(project).data)

    def destroy(self, request, *args, **kwargs):
        project = self.get_object()
        ProjectService().delete_project(project)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProjectTaskListAPIView(generics.ListAPIView):
    """
    Lists every task of one owned project.
    Endpoint: GET /api/v1/projects/{project_id}/tasks/
    """
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = TaskSerializer

    def get_queryset(self):
        project = ProjectService().get_project(self.kwargs['project_id'], self.request.user.id)
        return TaskService().list_tasks(self.request.user.id, project_id=project.id)


class ProjectRecalculateAPIView(APIView):
    """
    Re-runs the aggregation for one owned project and returns it.
    Endpoint: POST /api/v1/projects/{pk}/recalculate/
    """
    permission_classes = [permissions.IsAuthenticated, IsOwner]

    def post(self, request, pk):
        service = ProjectService()
        project = service.get_project(pk, request.user.id)
        self.check_object_permissions(request, project)

        service.recalculate_project(project)
        project = service.get_project(pk, request.user.id)
        return Response(ProjectSerializer(project).data)


class TaskListCreateAPIView(APIView):
    """
    * GET: Lists the user's tasks, optionally filtered by ``project_id``.
    * POST: Creates a task in an owned project and recalculates that project.
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        raw_project_id = request.query_params.get('project_id') or request.query_params.get('projectId')

        project_id = None
        if raw_project_id:
            try:
                project_id = uuid.UUID(raw_project_id.strip())
            except ValueError:
                # A malformed id cannot match any project.
                return Response([], status=status.HTTP_200_OK)

        tasks = TaskService().list_tasks(request.user.id, project_id=project_id)
        return Response(TaskSerializer(tasks, many=True).data)

    def post(self, request):
        write_serializer = TaskCreateSerializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        task = TaskService().create_task(owner_id=request.user.id, **write_serializer.validated_data)
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskDetailAPIView(APIView):
    """
    Handles GET, PUT, PATCH, DELETE for a single task.
    Every write recalculates the affected project(s) before responding.
    """
    permission_classes = [permissions.IsAuthenticated, IsOwner]

    def get_object(self, pk):
        task = TaskService().get_task(pk, self.request.user.id)
        self.check_object_permissions(self.request, task)
        return task

    def get(self, request, pk):
        task = self.get_object(pk)
        return Response(TaskSerializer(task).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        task = self.get_object(pk)

        write_serializer = TaskWriteSerializer(data=request.data, partial=partial)
        write_serializer.is_valid(raise_exception=True)

        updated_task = TaskService().update_task(task, owner_id=request.user.id, **write_serializer.validated_data)
        return Response(TaskSerializer(updated_task).data)

    def delete(self, request, pk):
        task = self.get_object(pk)
        TaskService().delete_task(task)
        return Response(status=status.HTTP_204_NO_CONTENT)
