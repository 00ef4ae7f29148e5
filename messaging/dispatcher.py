# messaging/dispatcher.py

import logging
from typing import Dict, Iterable, Optional

from projects.aggregation import Aggregate, AggregationEngine
from .commands import RecalculateProject

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Executes recalculation commands synchronously, in the caller's thread,
    before the request that emitted them returns.
    """

    def __init__(self, engine: Optional[AggregationEngine] = None):
        self.engine = engine or AggregationEngine()

    def dispatch(self, command: RecalculateProject) -> Optional[Aggregate]:
        if not isinstance(command, RecalculateProject):
            raise TypeError(f"Unsupported command: {command!r}")
        return self.engine.recalculate(command.project_id)

    def dispatch_all(self, commands: Iterable[RecalculateProject]) -> Dict:
        """
        Runs a batch of commands, once per project, in the order first seen.
        Returns {str(project_id): Aggregate or None}.
        """
        results = {}
        for command in commands:
            key = str(command.project_id)
            if key in results:
                continue
            results[key] = self.dispatch(command)
        logger.debug(f"Dispatched recalculation for {len(results)} project(s)")
        return results
