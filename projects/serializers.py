# in projects/serializers.py

from collections.abc import Mapping

from rest_framework import serializers
from .models import Project, Status, Task

# Upper bound of a PositiveIntegerField on every supported database.
MAX_TASK_WEIGHT = 2147483647


class ProjectSerializer(serializers.ModelSerializer):
    """
    Serializer for the Project model.
    Handles serialization for list and detail views.
    """

    # owner_id, status and progress are never taken from user input: the
    # owner comes from the request, the rest from the aggregation engine.
    owner_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'status', 'progress', 'owner_id', 'created_at', 'updated_at']
        read_only_fields = ['id', 'status', 'progress', 'owner_id', 'created_at', 'updated_at']


class ProjectWriteSerializer(serializers.ModelSerializer):
    """
    A more constrained serializer for creating and renaming projects.
    """
    class Meta:
        model = Project
        fields = ['name']


class ProjectSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name', 'status', 'progress']
        read_only_fields = fields


class TaskSerializer(serializers.ModelSerializer):
    project_id = serializers.UUIDField(read_only=True)
    project = ProjectSummarySerializer(read_only=True)

    class Meta:
        model = Task
        fields = ['id', 'name', 'status', 'weight', 'project_id', 'project', 'created_at', 'updated_at']
        read_only_fields = fields


class TaskWriteSerializer(serializers.Serializer):
    """
    Validates task input for a full update (PUT, every field required) or a
    partial one (PATCH). ``projectId`` is accepted as an alias of ``project_id``.
    """
    name = serializers.CharField(max_length=255)
    status = serializers.ChoiceField(choices=Status.choices)
    weight = serializers.IntegerField(min_value=1, max_value=MAX_TASK_WEIGHT)
    project_id = serializers.UUIDField()

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and 'projectId' in data and 'project_id' not in data:
            data = dict(data.items())
            data['project_id'] = data.pop('projectId')
        return super().to_internal_value(data)


class TaskCreateSerializer(TaskWriteSerializer):
    """
    Same fields as TaskWriteSerializer, but ``weight`` may be omitted on
    create and defaults to 1. A full update (PUT) must still send it.
    """
    weight = serializers.IntegerField(min_value=1, max_value=MAX_TASK_WEIGHT, default=1)
