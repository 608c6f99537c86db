class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFound(DomainError):
    """Raised when the employee is unknown to the directory or inactive."""

    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class NotWorking(DomainError):
    """Raised when stop is requested while the employee has no open session."""

    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} is not working")
        self.employee_id = employee_id


class StoreUnavailable(DomainError):
    """Raised when the session store cannot be reached.

    Retryable: a failed statement is rolled back, so no state was changed.
    """
