"""
Custom exception classes for the E.Q.U.I.P. 360 assessment application.

Provides structured error handling with user-friendly messages and proper
error categorization for catalog, scoring, session and persistence failures.
"""

from __future__ import annotations

from typing import Any


class Equip360Error(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.user_message = user_message or self._get_default_user_message()

    def _get_default_user_message(self) -> str:
        """Provide a user-friendly version of the error message."""
        return "An unexpected error occurred. Please try again."

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class ValidationError(Equip360Error):
    """Raised when input validation fails."""

    def __init__(
        self, field: str, message: str, value: Any = None, details: dict[str, Any] | None = None
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=f"Validation failed for field '{field}': {message}",
            details=details or {"field": field, "value": value},
            user_message=f"Invalid {field.replace('_', ' ')}: {message}",
        )

    def _get_default_user_message(self) -> str:
        return f"Please check your input for {self.field.replace('_', ' ')} and try again."


class CatalogError(Equip360Error):
    """Raised when the scenario catalog is malformed. Fatal at load time."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Invalid scenario catalog: {message}",
            details=details,
            user_message="The assessment content could not be loaded.",
        )


class ScoreVectorError(Equip360Error):
    """Raised when a score vector does not have one slot per metric."""

    def __init__(self, scenario_id: str | None, length: int, expected: int):
        self.scenario_id = scenario_id
        super().__init__(
            message=(
                f"Score vector for {scenario_id or 'response'} has {length} entries, "
                f"expected {expected}"
            ),
            details={"scenario_id": scenario_id, "length": length, "expected": expected},
            user_message="Your responses could not be scored. Please restart the assessment.",
        )


class UnknownScenarioError(Equip360Error):
    """Raised when a scenario id is not part of the catalog."""

    def __init__(self, scenario_id: str):
        self.scenario_id = scenario_id
        super().__init__(
            message=f"Scenario '{scenario_id}' not found",
            details={"scenario_id": scenario_id},
        )

    def _get_default_user_message(self) -> str:
        return "The selected scenario could not be found. Please refresh and try again."


class UnknownChoiceError(Equip360Error):
    """Raised when a choice letter does not exist on a scenario."""

    def __init__(self, scenario_id: str, choice: str):
        self.scenario_id = scenario_id
        self.choice = choice
        super().__init__(
            message=f"Choice '{choice}' not found on scenario '{scenario_id}'",
            details={"scenario_id": scenario_id, "choice": choice},
        )

    def _get_default_user_message(self) -> str:
        return "Please select one of the available answers."


class DatabaseError(Equip360Error):
    """Raised when database operations fail."""

    def __init__(self, message: str, operation: str, details: dict[str, Any] | None = None):
        self.operation = operation
        super().__init__(
            message=f"Database error during {operation}: {message}",
            details=details or {"operation": operation},
            user_message="A database error occurred. Please try again in a moment.",
        )


class ConnectionError(DatabaseError):
    """Raised when database connection fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, operation="connection", details=details)


class IntegrityError(DatabaseError):
    """Raised when database integrity constraints are violated."""

    def __init__(
        self,
        message: str,
        constraint: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.constraint = constraint
        super().__init__(
            message=message,
            operation="integrity_check",
            details=details or {"constraint": constraint},
        )


class ResultNotFoundError(Equip360Error):
    """Raised when a stored assessment result is not found."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__(
            message=f"Assessment result with ID {assessment_id} not found",
            details={"assessment_id": assessment_id},
        )

    def _get_default_user_message(self) -> str:
        return "The requested assessment could not be found."


class ConfigurationError(Equip360Error):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            details=details or {"config_key": config_key},
            user_message="Configuration error. Please check your settings.",
        )


class ExportError(Equip360Error):
    """Raised when data export fails."""

    def __init__(
        self,
        message: str,
        export_format: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.export_format = export_format
        super().__init__(
            message=message,
            details=details or {"export_format": export_format},
            user_message="Export failed. Please try again or choose a different format.",
        )


def handle_database_error(e: Exception, operation: str = "database operation") -> DatabaseError:
    """
    Convert generic database exceptions to appropriate custom exceptions.

    Args:
        e: The original exception
        operation: Description of the operation that failed

    Returns:
        Appropriate DatabaseError subclass

    Example:
        >>> try:
        ...     session.commit()
        >>> except Exception as e:
        ...     raise handle_database_error(e, "save assessment")
    """
    error_msg = str(e).lower()

    if "connection" in error_msg or "timeout" in error_msg:
        return ConnectionError(str(e))
    elif "unique constraint" in error_msg or "duplicate" in error_msg:
        return IntegrityError(str(e), constraint="unique")
    elif "foreign key" in error_msg or "foreign_key" in error_msg:
        return IntegrityError(str(e), constraint="foreign_key")
    elif "check constraint" in error_msg:
        return IntegrityError(str(e), constraint="check")
    else:
        return DatabaseError(str(e), operation)


def create_user_friendly_error_message(error: Exception) -> str:
    """
    Create a user-friendly error message from any exception.

    Example:
        >>> error = UnknownChoiceError("scenario-1", "E")
        >>> create_user_friendly_error_message(error)
        'Please select one of the available answers.'
    """
    if isinstance(error, Equip360Error):
        return error.user_message

    error_type = type(error).__name__
    messages = {
        "ValueError": "Invalid input provided. Please check your data and try again.",
        "KeyError": "Required information is missing. Please check your input.",
        "TypeError": "Incorrect data type provided. Please check your input format.",
    }
    return messages.get(
        error_type, "An unexpected error occurred. Please try again or contact support."
    )


def log_error_details(error: Exception, context: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Create structured error details for logging.

    Args:
        error: The exception to log
        context: Additional context information

    Returns:
        Dictionary with structured error details
    """
    details = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    if isinstance(error, Equip360Error):
        details.update({"user_message": error.user_message, "error_details": error.details})

    return details
