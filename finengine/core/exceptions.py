"""Exception hierarchy for the financial engine.

All engine errors inherit from FinEngineException so the API layer can map
them to a response in one place.

Error codes follow pattern: [CATEGORY][NUMBER]
- CFG: Configuration errors (001-099)
- PER: Reporting period errors (100-199)
- PAY: Payroll errors (200-299)
"""

from __future__ import annotations

from typing import Any


class FinEngineException(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with message and metadata.

        Args:
            message: Human-readable error message
            code: Unique error code (e.g., "CFG001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# CONFIGURATION ERRORS (CFG001-099)
# ============================================================================

class ConfigurationError(FinEngineException):
    """Base class for invalid reporting parameters."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """A reporting parameter (tax regime, VAT rate) is not usable."""

    def __init__(self, parameter: str, value: Any = None, reason: str | None = None):
        message = f"Invalid configuration: {parameter}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message=message,
            code="CFG001",
            status_code=422,
            details={"parameter": parameter, "value": None if value is None else str(value)},
        )


# ============================================================================
# PERIOD ERRORS (PER100-199)
# ============================================================================

class PeriodError(FinEngineException):
    """Base class for reporting period errors."""
    pass


class InvalidPeriodError(PeriodError):
    """Month or year outside the accepted range."""

    def __init__(self, month: int, year: int):
        super().__init__(
            message=f"Invalid reporting period: month={month} year={year}",
            code="PER100",
            status_code=422,
            details={"month": month, "year": year},
        )


# ============================================================================
# PAYROLL ERRORS (PAY200-299)
# ============================================================================

class PayrollError(FinEngineException):
    """Base class for payroll errors."""
    pass


class EmptyPayrollError(PayrollError):
    """No active employee to generate payroll for."""

    def __init__(self, period_label: str):
        super().__init__(
            message=f"No active employees to generate payroll for {period_label}",
            code="PAY200",
            status_code=409,
            details={"period": period_label},
        )


class PayrollOwnershipError(PayrollError):
    """A payroll row with this id is already owned by another organisation."""

    def __init__(self, expense_id: str, organization_id: str | None):
        super().__init__(
            message=f"Payroll expense {expense_id} belongs to another organisation",
            code="PAY201",
            status_code=409,
            details={"expense_id": expense_id, "organization_id": organization_id},
        )
