# projects/repository.py

from typing import List, Optional
import uuid

from django.core.exceptions import ValidationError as DjangoValidationError

from .models import Project, Task


class ProjectRepository:
    """
    Acts as a data access layer for the Project model.
    All direct database interactions for Projects should be in this class.
    """

    def find_by_id(self, project_id: uuid.UUID) -> Optional[Project]:
        """
        Finds a single Project instance by its primary key.

        Returns:
            The Project instance or None if not found.
        """
        try:
            return Project.objects.get(id=project_id)
        except (Project.DoesNotExist, DjangoValidationError):
            return None

    def find_owned(self, project_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Project]:
        """
        Finds a Project only if it belongs to the given owner.
        A project owned by someone else is reported exactly like a missing one.
        """
        try:
            return Project.objects.get(id=project_id, owner_id=owner_id)
        except (Project.DoesNotExist, DjangoValidationError):
            return None

    def list_for_owner(self, owner_id: uuid.UUID) -> List[Project]:
        return list(Project.objects.filter(owner_id=owner_id))

    def list_all(self) -> List[Project]:
        return list(Project.objects.all())

    def create(self, *, owner_id: uuid.UUID, name: str) -> Project:
        """
        Creates a new project. Status and progress start at their defaults
        (draft, 0.0) until the first task arrives.
        """
        return Project.objects.create(owner_id=owner_id, name=name)

    def update_name(self, project: Project, name: str) -> Project:
        project.name = name
        project.save(update_fields=['name', 'updated_at'])
        return project

    def save_aggregate(self, project: Project, progress, status: str) -> Project:
        """
        Writes the derived fields. updated_at is always refreshed, even when
        the values did not change.
        """
        project.progress = progress
        project.status = status
        project.save(update_fields=['progress', 'status', 'updated_at'])
        return project

    def delete(self, project: Project) -> None:
        project.delete()


class TaskRepository:
    """
    Data access layer for the Task model.
    """

    def find_by_id(self, task_id: uuid.UUID) -> Optional[Task]:
        try:
            return Task.objects.select_related('project').get(id=task_id)
        except (Task.DoesNotExist, DjangoValidationError):
            return None

    def find_by_project(self, project_id: uuid.UUID) -> List[Task]:
        """
        Loads the full task set of a project. No pagination: a project's
        tasks are expected to fit in memory.
        """
        return list(Task.objects.filter(project_id=project_id))

    def list_for_owner(self, owner_id: uuid.UUID, project_id: Optional[uuid.UUID] = None) -> List[Task]:
        queryset = Task.objects.select_related('project').filter(project__owner_id=owner_id)
        if project_id is not None:
            queryset = queryset.filter(project_id=project_id)
        return list(queryset)

    def create(self, *, project_id: uuid.UUID, name: str, status: str, weight: int) -> Task:
        return Task.objects.create(
            project_id=project_id,
            name=name,
            status=status,
            weight=weight,
        )

    def update(self, task: Task, **fields) -> Task:
        for field_name, value in fields.items():
            setattr(task, field_name, value)
        task.save(update_fields=[*fields.keys(), 'updated_at'])
        return task

    def delete(self, task: Task) -> None:
        task.delete()

    def delete_for_project(self, project_id: uuid.UUID) -> int:
        """
        Deletes every task referencing the project and returns how many were removed.
        """
        deleted, _ = Task.objects.filter(project_id=project_id).delete()
        return deleted
