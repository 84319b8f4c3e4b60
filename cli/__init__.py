"""
CLI package for the bill text extractor.

This package provides the command-line interface for extracting structured
bill records from OCR text and managing the extraction configuration.
"""

from .version import __version__
