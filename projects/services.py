# projects/services.py

import contextlib
import logging
import uuid
from typing import List, Optional

from django.conf import settings
from django.db import transaction
from rest_framework.exceptions import NotFound

from messaging.commands import RecalculateProject
from messaging.dispatcher import CommandDispatcher
from .aggregation import Aggregate, AggregationEngine
from .models import Project, Task
from .repository import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)

TASK_FIELDS = ('name', 'status', 'weight', 'project_id')


class ProjectService:
    """
    The service layer for handling all business logic related to Projects.
    """

    def __init__(self, project_repo: Optional[ProjectRepository] = None,
                 task_repo: Optional[TaskRepository] = None,
                 dispatcher: Optional[CommandDispatcher] = None):
        self.project_repo = project_repo or ProjectRepository()
        self.task_repo = task_repo or TaskRepository()
        self.dispatcher = dispatcher or CommandDispatcher(AggregationEngine(self.project_repo, self.task_repo))

    def list_projects(self, owner_id: uuid.UUID) -> List[Project]:
        return self.project_repo.list_for_owner(owner_id)

    def get_project(self, project_id: uuid.UUID, owner_id: uuid.UUID) -> Project:
        project = self.project_repo.find_owned(project_id, owner_id)
        if project is None:
            raise NotFound("Project not found.")
        return project

    def create_project(self, *, owner_id: uuid.UUID, name: str) -> Project:
        project = self.project_repo.create(owner_id=owner_id, name=name)
        logger.info(f"Created project {project.id} for owner {owner_id}")
        return project

    def rename_project(self, project: Project, name: str) -> Project:
        return self.project_repo.update_name(project, name)

    def delete_project(self, project: Project) -> int:
        """
        Deletes the project together with all of its tasks. No recalculation
        follows: the aggregate disappears with the project.
        """
        project_id = project.id
        with transaction.atomic():
            deleted_tasks = self.task_repo.delete_for_project(project_id)
            self.project_repo.delete(project)
        logger.info(f"Deleted project {project_id} and {deleted_tasks} task(s)")
        return deleted_tasks

    def recalculate_project(self, project: Project) -> Optional[Aggregate]:
        """Re-runs the aggregation on demand, e.g. after a failed recalculation."""
        return self.dispatcher.dispatch(RecalculateProject(project.id))


class TaskService:
    """
    The service layer for Tasks. Every write goes through ``_recalculating``,
    which recalculates each affected project once the write is done.
    """

    def __init__(self, project_repo: Optional[ProjectRepository] = None,
                 task_repo: Optional[TaskRepository] = None,
                 dispatcher: Optional[CommandDispatcher] = None):
        self.project_repo = project_repo or ProjectRepository()
        self.task_repo = task_repo or TaskRepository()
        self.dispatcher = dispatcher or CommandDispatcher(AggregationEngine(self.project_repo, self.task_repo))

    def _transaction(self):
        if settings.TRACKER_ATOMIC_TASK_MUTATIONS:
            return transaction.atomic()
        return contextlib.nullcontext()

    @contextlib.contextmanager
    def _recalculating(self):
        """
        Yields a list the caller fills with the ids of the projects its write
        touched; they are recalculated when the block exits normally.
        """
        affected = []
        with self._transaction():
            yield affected
            self.dispatcher.dispatch_all(RecalculateProject(project_id) for project_id in affected)

    def _get_owned_project(self, project_id: uuid.UUID, owner_id: uuid.UUID) -> Project:
        project = self.project_repo.find_owned(project_id, owner_id)
        if project is None:
            raise NotFound("Project not found.")
        return project

    def list_tasks(self, owner_id: uuid.UUID, project_id: Optional[uuid.UUID] = None) -> List[Task]:
        return self.task_repo.list_for_owner(owner_id, project_id=project_id)

    def get_task(self, task_id: uuid.UUID, owner_id: uuid.UUID) -> Task:
        task = self.task_repo.find_by_id(task_id)
        if task is None or str(task.project.owner_id) != str(owner_id):
            raise NotFound("Task not found.")
        return task

    def create_task(self, *, owner_id: uuid.UUID, project_id: uuid.UUID, name: str, status: str, weight: int = 1) -> Task:
        # 1. Authorize project ownership BEFORE creating anything.
        project = self._get_owned_project(project_id, owner_id)

        # 2. Write the task; the project is recalculated on the way out.
        with self._recalculating() as affected:
            task = self.task_repo.create(project_id=project.id, name=name, status=status, weight=weight)
            affected.append(project.id)

        logger.info(f"Created task {task.id} in project {project.id}")
        return self.task_repo.find_by_id(task.id)

    def update_task(self, task: Task, *, owner_id: uuid.UUID, **changes) -> Task:
        """
        Applies a full or partial update. Moving a task to another project
        requires owning that project too, and recalculates both projects.
        """
        unknown = set(changes) - set(TASK_FIELDS)
        if unknown:
            raise TypeError(f"Unsupported task fields: {sorted(unknown)}")

        source_project_id = task.project_id
        target_project_id = changes.get('project_id', source_project_id)
        if str(target_project_id) != str(source_project_id):
            changes['project_id'] = self._get_owned_project(target_project_id, owner_id).id
        else:
            changes.pop('project_id', None)

        with self._recalculating() as affected:
            self.task_repo.update(task, **changes)
            affected.append(source_project_id)
            affected.append(task.project_id)

        if task.project_id != source_project_id:
            logger.info(f"Moved task {task.id} from project {source_project_id} to {task.project_id}")
        else:
            logger.info(f"Updated task {task.id} ({', '.join(changes) or 'no field changes'})")
        return self.task_repo.find_by_id(task.id)

    def delete_task(self, task: Task) -> None:
        task_id, project_id = task.id, task.project_id
        with self._recalculating() as affected:
            self.task_repo.delete(task)
            affected.append(project_id)
        logger.info(f"Deleted task {task_id} from project {project_id}")
