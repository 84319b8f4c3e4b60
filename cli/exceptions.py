"""
Custom exception classes for the CLI interface.

This module defines CLI-specific exceptions that provide clear error messages
and appropriate exit codes for different error conditions.
"""


class CLIError(Exception):
    """Base exception for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class InputError(CLIError):
    """Raised when the input text or an input file cannot be read."""

    def __init__(self, message: str):
        super().__init__(f"Input Error: {message}", exit_code=3)


class ConfigError(CLIError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str):
        super().__init__(f"Configuration Error: {message}", exit_code=5)
