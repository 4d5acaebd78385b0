"""Input validation package."""

from expense_tracker.validation.validator import (
    ADD_USAGE_MESSAGE,
    DELETE_USAGE_MESSAGE,
    CommandValidator,
    InputValidationError,
)

__all__ = [
    "ADD_USAGE_MESSAGE",
    "DELETE_USAGE_MESSAGE",
    "CommandValidator",
    "InputValidationError",
]
