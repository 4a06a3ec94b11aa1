from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Reason(str, Enum):
    OK = "ok"
    CONFIGURATION = "configuration"
    CONNECTIVITY = "connectivity"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    AUTHENTICATION = "authentication"


@dataclass(frozen=True)
class Outcome:
    """Result of a data-access or business operation.

    Truthiness follows ``ok`` so callers can write ``if service.add_student(s):``.
    ``value`` carries the entity, list or flag the operation produced; on
    failure it holds the operation's empty value (``None``, ``[]``, ``False``).
    """
    ok: bool
    reason: Reason = Reason.OK
    message: str = ""
    value: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def is_storage_error(self) -> bool:
        return self.reason in (Reason.CONFIGURATION, Reason.CONNECTIVITY)

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> "Outcome":
        return cls(True, Reason.OK, message, value)

    @classmethod
    def failure(cls, reason: Reason, message: str, value: Optional[Any] = None) -> "Outcome":
        return cls(False, reason, message, value)
