"""
Output formatters for Endpoint Documentation Merger.

This package provides formatters for text, JSON and YAML output.
"""

from endpoint_doc_merger.output.formatters import BaseFormatter, get_formatter
from endpoint_doc_merger.output.json_output import JsonFormatter
from endpoint_doc_merger.output.text_output import TextFormatter
from endpoint_doc_merger.output.yaml_output import YamlFormatter

__all__ = [
    "BaseFormatter",
    "get_formatter",
    "JsonFormatter",
    "TextFormatter",
    "YamlFormatter",
]
