"""
YAML output formatter.
"""

import yaml

from endpoint_doc_merger.models.doc import ApiDoc
from endpoint_doc_merger.output.formatters import BaseFormatter, doc_to_dict, register_formatter


@register_formatter("yaml")
class YamlFormatter(BaseFormatter):
    """
    Format output as YAML.
    """

    def format_docs(self, docs: list[ApiDoc]) -> str:
        """Format controller documentation as YAML."""
        data = {
            "total": len(docs),
            "apis": [doc_to_dict(doc) for doc in docs],
        }

        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
