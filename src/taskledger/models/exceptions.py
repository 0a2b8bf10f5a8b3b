"""Custom exceptions for taskledger.

Every failure of the core is a normal outcome of caller input and is raised
as one of these types. The CLI maps ``exit_code`` to the process exit status.
"""

from taskledger.utils import exit_codes


class TaskLedgerError(Exception):
    """Base exception for all taskledger errors."""

    exit_code: int = exit_codes.ERROR_GENERAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskLedgerError):
    """Raised for malformed input (empty content, out-of-range priority)."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class NotFoundError(TaskLedgerError):
    """Raised when a task id is absent, deleted or belongs to another owner."""

    exit_code = exit_codes.ERROR_NOT_FOUND

    def __init__(self, owner_id: str, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.owner_id = owner_id
        self.task_id = task_id


class InvalidStateError(TaskLedgerError):
    """Raised when the caller's view of a task is stale.

    Completing an already-completed task or reopening an open one.
    """

    exit_code = exit_codes.ERROR_INVALID_STATE
