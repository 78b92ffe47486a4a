"""
Exit codes for Pathly CLI.

Semantic exit codes so scripts can tell failures apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Goal or reward not found
ERROR_NOT_FOUND = 5

# Document store read/write failure
ERROR_STORAGE = 7

# Operation conflicts with the goal's state (paused, blocked, not enough points)
ERROR_CONFLICT = 8


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_STORAGE: "ERROR_STORAGE",
        ERROR_CONFLICT: "ERROR_CONFLICT",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_NOT_FOUND: "Goal or reward not found",
        ERROR_STORAGE: "Storage error - data may be out of date, run 'pathly goals refresh'",
        ERROR_CONFLICT: "Operation not allowed in the current state",
    }
    return descriptions.get(code, "Unknown error")
