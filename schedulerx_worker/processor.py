"""The processor interface user tasks implement, and the result they return."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from schedulerx_worker.statuses import InstanceStatus


@dataclass
class ProcessResult:
    """Outcome of processing a job: a status and a free-form result text."""

    status: InstanceStatus = InstanceStatus.UNKNOWN
    result: str = ""

    @classmethod
    def from_success(cls, succeeded: bool, result: str = "") -> "ProcessResult":
        """Build a result that is either succeeded or failed."""
        status = InstanceStatus.SUCCEED if succeeded else InstanceStatus.FAILED
        return cls(status=status, result=result)

    def __str__(self) -> str:
        return f"ProcessResult [status={InstanceStatus(self.status).descriptor()}, result={self.result}]"


class Processor(ABC):
    """A task the worker can run; registered under a name."""

    @abstractmethod
    def process(self, ctx: Any) -> ProcessResult:
        """Run the task for the given job context; raise to signal failure."""