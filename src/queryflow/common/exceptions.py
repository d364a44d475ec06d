from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for queryflow.

    Error codes categorize failures without creating numerous exception
    classes. Each category uses its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        VALIDATION_*: Input validation errors
        EXECUTION_*: Errors raised while preparing an execution
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_ARGUMENT = "VALIDATION_002"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"


class QueryFlowError(Exception):
    """Base exception for all queryflow errors.

    Uses error codes for categorization instead of a deep hierarchy of
    exception classes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize a queryflow error.

        Args:
            message: Error message
            error_code: Error code from ErrorCode enum
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        # Lazy import to avoid circular dependency with the logging package
        from queryflow.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
        )

    def __str__(self) -> str:
        """String representation of the error."""
        return f"[{self.error_code.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


class InvalidArgumentError(QueryFlowError, ValueError):
    """A caller handed over an argument that violates a precondition.

    Also a ValueError so callers that do not know queryflow can catch it.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code=ErrorCode.INVALID_ARGUMENT, details=details)


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> QueryFlowError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        QueryFlowError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return QueryFlowError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
    )


def validation_error(
    message: str,
    field: Optional[str] = None,
    value: Any = None,
    **kwargs
) -> QueryFlowError:
    """Create a validation error.

    Args:
        message: Error message
        field: Field that failed validation
        value: Invalid value
        **kwargs: Additional error details

    Returns:
        QueryFlowError with VALIDATION_ERROR code
    """
    details = kwargs.get('details', {})
    if field:
        details["field"] = field
    if value is not None:
        details["value"] = str(value)

    return QueryFlowError(
        message=message,
        error_code=ErrorCode.VALIDATION_ERROR,
        details=details,
    )


def invalid_argument_error(
    message: str,
    argument: Optional[str] = None,
    **kwargs
) -> InvalidArgumentError:
    """Create an invalid argument error.

    Raised at the point a caller hands over an argument that violates a
    precondition, never deferred.

    Args:
        message: Error message naming the violated precondition
        argument: Name of the offending argument
        **kwargs: Additional error details

    Returns:
        InvalidArgumentError with INVALID_ARGUMENT code
    """
    details = kwargs.get('details', {})
    if argument:
        details["argument"] = argument

    return InvalidArgumentError(message=message, details=details)
