from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from ..common.validators import Violation
    from ..staff.model import StaffForm


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when submitted data fails one or more field rules.

    ``form`` is the submission to redisplay, when the service changed it
    (e.g. edit carries the stored photo path forward).
    """

    def __init__(self, violations: Sequence["Violation"], *, form: Optional["StaffForm"] = None):
        self.violations = list(violations)
        self.form = form
        super().__init__("; ".join(v.message for v in self.violations))


class NotFoundError(DomainError):
    """Raised when the requested staff member does not exist."""


class DuplicateStaffError(DomainError):
    """Raised by the repository when a unique column collides with another record."""

    def __init__(self, field: str, value: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for {field}: {value!r}")
