"""
CLI Context module for the bill text extractor.

This module provides the shared context and decorators used across CLI commands,
preventing circular imports between cli.main and command modules.
"""

import os
from typing import Optional

import click

from extraction.config import ExtractionConfig, load_config
from extraction.document_parser import DocumentParser
from extraction.exceptions import ConfigurationError
from cli.exceptions import ConfigError


class CLIContext:
    """Context object to share state between CLI commands."""

    def __init__(self):
        self.verbose = False
        self.quiet = False
        # Environment variable is used when --config-file is not given
        self.config_file = os.environ.get('BILL_EXTRACT_CONFIG')
        self.config: Optional[ExtractionConfig] = None
        self.parser: Optional[DocumentParser] = None

    def get_config(self) -> ExtractionConfig:
        """Get or load the extraction configuration."""
        if self.config is None:
            if self.config_file:
                try:
                    self.config = load_config(self.config_file)
                except ConfigurationError as e:
                    raise ConfigError(str(e))
            else:
                self.config = ExtractionConfig()
        return self.config

    def get_parser(self) -> DocumentParser:
        """Get or create the document parser."""
        if self.parser is None:
            self.parser = DocumentParser(self.get_config())
        return self.parser


# Pass context between commands
pass_context = click.make_pass_decorator(CLIContext, ensure=True)
