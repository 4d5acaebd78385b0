"""
Base exception for user-facing failures.

Every error a user can trigger through the command line derives from
ExpenseTrackerError. The CLI prints its message and exits non-zero;
anything else (driver errors, constraint violations) propagates untouched.
"""


class ExpenseTrackerError(Exception):
    """Base exception carrying a message meant for the terminal."""
    
    exit_code = 1
    
    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
