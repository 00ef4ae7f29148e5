# projects/aggregation.py

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from .models import Status
from .repository import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)

ONE_PLACE = Decimal('0.1')


@dataclass(frozen=True)
class Aggregate:
    """A project's derived state: completion percentage and rollup status."""
    progress: Decimal
    status: str


EMPTY_AGGREGATE = Aggregate(progress=Decimal('0.0'), status=Status.DRAFT.value)


def truncated_percentage(completed_weight: int, total_weight: int) -> Decimal:
    """
    completed/total as a percentage, truncated (never rounded) to one decimal
    place. Integer arithmetic on the value scaled by 10 keeps boundaries such
    as 1/3 -> 33.3 exact.
    """
    if total_weight <= 0:
        return Decimal('0.0')
    tenths = (completed_weight * 1000) // total_weight
    return (Decimal(tenths) / 10).quantize(ONE_PLACE)


def rollup_status(statuses) -> str:
    statuses = {str(status) for status in statuses}
    if not statuses:
        return Status.DRAFT.value
    if statuses == {Status.DONE.value}:
        return Status.DONE.value
    # Done and draft tasks without any in_progress task roll up to draft,
    # however much of the weight is already done.
    if Status.IN_PROGRESS.value in statuses:
        return Status.IN_PROGRESS.value
    return Status.DRAFT.value


def compute_aggregate(tasks: Iterable) -> Aggregate:
    """
    Pure rollup of a task set. Each task only needs ``weight`` and ``status``.
    """
    tasks = list(tasks)
    if not tasks:
        return EMPTY_AGGREGATE

    total_weight = sum(task.weight for task in tasks)
    completed_weight = sum(task.weight for task in tasks if task.status == Status.DONE)

    return Aggregate(
        progress=truncated_percentage(completed_weight, total_weight),
        status=rollup_status(task.status for task in tasks),
    )


class AggregationEngine:
    """
    Recomputes and stores a project's progress/status from its current tasks.
    The stores are injected; by default the ORM repositories are used.
    """

    def __init__(self, project_repo: Optional[ProjectRepository] = None, task_repo: Optional[TaskRepository] = None):
        self.project_repo = project_repo or ProjectRepository()
        self.task_repo = task_repo or TaskRepository()

    def recalculate(self, project_id: uuid.UUID) -> Optional[Aggregate]:
        """
        Returns the stored Aggregate, or None when the project no longer
        exists (e.g. deleted by a concurrent request). Store errors propagate.
        """
        project = self.project_repo.find_by_id(project_id)
        if project is None:
            logger.info(f"Skipping recalculation: project {project_id} not found")
            return None

        aggregate = compute_aggregate(self.task_repo.find_by_project(project.id))
        self.project_repo.save_aggregate(project, aggregate.progress, aggregate.status)

        logger.debug(f"Recalculated project {project.id}: progress={aggregate.progress} status={aggregate.status}")
        return aggregate
