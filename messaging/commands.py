# messaging/commands.py
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class RecalculateProject:
    """Emitted after any task write that changes the task set of a project."""
    project_id: uuid.UUID
