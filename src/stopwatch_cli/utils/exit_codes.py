"""
Exit codes for Stopwatch CLI.

Scripts wrapping the CLI can rely on these codes to tell apart a clean
exit, a rejected argument and a broken configuration store.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Configuration store could not be read or written
ERROR_CONFIG = 3


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONFIG: "ERROR_CONFIG",
    }
    return code_names.get(code, f"UNKNOWN({code})")

