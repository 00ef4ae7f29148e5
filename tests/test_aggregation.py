"""
Tests for the progress/status rollup and the aggregation engine.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock
import uuid

import pytest

from projects.aggregation import (
    Aggregate,
    AggregationEngine,
    compute_aggregate,
    rollup_status,
    truncated_percentage,
)
from projects.models import Project, Status


def t(weight, status):
    return SimpleNamespace(weight=weight, status=status)


# ===========================================================================
# compute_aggregate: pure rollup
# ===========================================================================

class TestComputeAggregate:

    def test_empty_task_set_is_draft_at_zero(self):
        assert compute_aggregate([]) == Aggregate(Decimal('0.0'), 'draft')

    @pytest.mark.parametrize("weights", [[1], [1, 1, 1], [5, 1, 9], [100, 3]])
    def test_all_done_is_done_at_hundred(self, weights):
        result = compute_aggregate([t(w, 'done') for w in weights])
        assert result.status == 'done'
        assert result.progress == Decimal('100.0')

    def test_one_of_three_equal_weights_truncates_to_33_3(self):
        result = compute_aggregate([t(1, 'done'), t(1, 'draft'), t(1, 'draft')])
        assert result.progress == Decimal('33.3')
        assert str(result.progress) == '33.3'

    def test_two_of_three_truncates_instead_of_rounding_up(self):
        # 66.666... must not become 66.7
        result = compute_aggregate([t(1, 'done'), t(1, 'done'), t(1, 'in_progress')])
        assert result.progress == Decimal('66.6')

    def test_almost_done_never_shows_hundred(self):
        result = compute_aggregate([t(9999, 'done'), t(1, 'in_progress')])
        assert result.progress == Decimal('99.9')
        assert result.status == 'in_progress'

    def test_done_and_draft_without_in_progress_stays_draft(self):
        result = compute_aggregate([t(9, 'done'), t(1, 'draft')])
        assert result.status == 'draft'
        assert result.progress == Decimal('90.0')

    def test_any_in_progress_task_makes_project_in_progress(self):
        result = compute_aggregate([t(1, 'draft'), t(1, 'in_progress'), t(3, 'draft')])
        assert result.status == 'in_progress'
        assert result.progress == Decimal('0.0')

    def test_mixed_weights_example(self):
        tasks = [t(2, 'done'), t(1, 'in_progress'), t(1, 'draft')]
        assert compute_aggregate(tasks) == Aggregate(Decimal('50.0'), 'in_progress')

    def test_one_of_three_weight_units_done_is_draft(self):
        tasks = [t(1, 'done'), t(2, 'draft')]
        assert compute_aggregate(tasks) == Aggregate(Decimal('33.3'), 'draft')

    def test_accepts_enum_statuses(self):
        result = compute_aggregate([t(1, Status.DONE), t(1, Status.IN_PROGRESS)])
        assert result == Aggregate(Decimal('50.0'), 'in_progress')

    def test_accepts_a_generator(self):
        result = compute_aggregate(t(1, 'done') for _ in range(3))
        assert result.status == 'done'


class TestHelpers:

    @pytest.mark.parametrize("completed,total,expected", [
        (0, 5, '0.0'),
        (1, 3, '33.3'),
        (2, 3, '66.6'),
        (1, 8, '12.5'),
        (1, 7, '14.2'),
        (5, 5, '100.0'),
        (0, 0, '0.0'),
    ])
    def test_truncated_percentage(self, completed, total, expected):
        assert truncated_percentage(completed, total) == Decimal(expected)

    def test_result_has_exactly_one_decimal_place(self):
        assert truncated_percentage(1, 2).as_tuple().exponent == -1

    def test_rollup_status_of_nothing_is_draft(self):
        assert rollup_status([]) == 'draft'


# ===========================================================================
# AggregationEngine: with stubbed stores
# ===========================================================================

class TestAggregationEngineWithStubs:

    def test_missing_project_is_a_silent_none(self):
        project_repo = MagicMock()
        project_repo.find_by_id.return_value = None
        task_repo = MagicMock()

        engine = AggregationEngine(project_repo, task_repo)

        assert engine.recalculate(uuid.uuid4()) is None
        task_repo.find_by_project.assert_not_called()
        project_repo.save_aggregate.assert_not_called()

    def test_writes_computed_values_through_the_store(self):
        project = SimpleNamespace(id=uuid.uuid4())
        project_repo = MagicMock()
        project_repo.find_by_id.return_value = project
        task_repo = MagicMock()
        task_repo.find_by_project.return_value = [t(1, 'done'), t(1, 'draft')]

        result = AggregationEngine(project_repo, task_repo).recalculate(project.id)

        assert result == Aggregate(Decimal('50.0'), 'draft')
        project_repo.save_aggregate.assert_called_once_with(project, Decimal('50.0'), 'draft')

    def test_store_failure_propagates(self):
        project_repo = MagicMock()
        project_repo.find_by_id.return_value = SimpleNamespace(id=uuid.uuid4())
        project_repo.save_aggregate.side_effect = RuntimeError("disk full")
        task_repo = MagicMock()
        task_repo.find_by_project.return_value = []

        with pytest.raises(RuntimeError):
            AggregationEngine(project_repo, task_repo).recalculate(uuid.uuid4())


# ===========================================================================
# AggregationEngine: against the database
# ===========================================================================

@pytest.mark.django_db
class TestAggregationEngine:

    def test_recalculate_persists_progress_and_status(self, make_project, make_task):
        project = make_project()
        make_task(project, status='done', weight=2)
        make_task(project, status='in_progress', weight=1)
        make_task(project, status='draft', weight=1)

        result = AggregationEngine().recalculate(project.id)

        project.refresh_from_db()
        assert result == Aggregate(Decimal('50.0'), 'in_progress')
        assert project.progress == Decimal('50.0')
        assert project.status == 'in_progress'

    def test_recalculate_is_idempotent(self, make_project, make_task):
        project = make_project()
        make_task(project, status='done')
        make_task(project, status='draft', weight=2)
        engine = AggregationEngine()

        first = engine.recalculate(project.id)
        project.refresh_from_db()
        first_touch = project.updated_at

        second = engine.recalculate(project.id)
        project.refresh_from_db()

        assert first == second == Aggregate(Decimal('33.3'), 'draft')
        assert project.updated_at >= first_touch

    def test_recalculate_resets_project_without_tasks(self, make_project):
        project = make_project()
        Project.objects.filter(id=project.id).update(progress=Decimal('80.0'), status='in_progress')

        AggregationEngine().recalculate(project.id)

        project.refresh_from_db()
        assert project.progress == Decimal('0.0')
        assert project.status == 'draft'

    def test_recalculate_unknown_project_returns_none(self):
        assert AggregationEngine().recalculate(uuid.uuid4()) is None

    def test_recalculate_only_counts_own_tasks(self, make_project, make_task):
        project = make_project("A")
        other = make_project("B")
        make_task(project, status='done')
        make_task(other, status='draft', weight=50)

        assert AggregationEngine().recalculate(project.id) == Aggregate(Decimal('100.0'), 'done')
