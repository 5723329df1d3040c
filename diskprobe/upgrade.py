"""Running a sequence of upgrade tasks."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UpgradeError(Exception):
    """Raised when an upgrade task reports failure."""


class Task(ABC):
    """One step of an upgrade."""

    @abstractmethod
    def pre_upgrade(self) -> bool:
        """Run the task; return whether it succeeded."""

    @abstractmethod
    def is_success(self) -> BaseException | None:
        """Return the error the task hit, or None if it succeeded."""


def run_upgrade(*args: Task) -> None:
    """Run each task in order, stopping with UpgradeError at the first failure."""
    for task in args:
        task.pre_upgrade()
        error = task.is_success()
        if error is not None:
            raise UpgradeError(f"upgrade failed. Error : {error}") from error