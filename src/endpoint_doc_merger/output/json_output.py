"""
JSON output formatter.
"""

import json

from endpoint_doc_merger.models.doc import ApiDoc
from endpoint_doc_merger.output.formatters import BaseFormatter, doc_to_dict, register_formatter


@register_formatter("json")
class JsonFormatter(BaseFormatter):
    """
    Format output as JSON.
    """

    def __init__(self, indent: int = 2) -> None:
        """
        Initialize the JSON formatter.

        Args:
            indent: JSON indentation level.
        """
        self.indent = indent

    def format_docs(self, docs: list[ApiDoc]) -> str:
        """Format controller documentation as JSON."""
        data = {
            "total": len(docs),
            "apis": [doc_to_dict(doc) for doc in docs],
        }

        return json.dumps(data, indent=self.indent, default=str)
