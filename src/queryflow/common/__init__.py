"""Common exceptions for queryflow.

Exception Design:
    The exception system uses error codes for categorization rather than
    numerous specific exception classes. All exceptions are QueryFlowError
    instances carrying structured error information. InvalidArgumentError
    is the one subclass, so precondition failures are also ValueErrors.
"""

from queryflow.common.exceptions import (
    QueryFlowError,
    InvalidArgumentError,
    ErrorCode,
    # Helper functions
    configuration_error,
    validation_error,
    invalid_argument_error,
)

__all__ = [
    # Base Exception and Error Codes
    "QueryFlowError",
    "InvalidArgumentError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "validation_error",
    "invalid_argument_error",
]
