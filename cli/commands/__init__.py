"""
CLI command modules for the bill text extractor.

This package contains the command implementations organized by functional area:
- extract_commands: Bill text extraction
- config_commands: Configuration management operations
"""

# Import command modules for easy access
from . import (
    extract_commands,
    config_commands
)

__all__ = [
    'extract_commands',
    'config_commands'
]
