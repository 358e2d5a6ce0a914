"""Typed dataclasses for the tasktrack data model.

A task is stored on disk as {"id": int, "title": str, "completed": bool}.
Unknown keys are ignored; missing keys use defaults. Values are taken as
they are; the repository validates records before building tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

MIN_TITLE_LENGTH = 3

FIELDS = ["id", "title", "completed"]


@dataclass
class Task:
    """A single task.

    ``id`` stays 0 until the task is first saved; the repository then
    assigns the next free id.
    """

    id: int = 0
    title: str = ""
    completed: bool = False

    @property
    def is_new(self) -> bool:
        return self.id == 0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Task:
        return cls(
            id=d.get("id", 0),
            title=d.get("title", ""),
            completed=d.get("completed", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "completed": self.completed}
