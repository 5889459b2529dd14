"""
Human-readable text output formatter.
"""

from io import StringIO

from rich.console import Console
from rich.table import Table

from endpoint_doc_merger.models.doc import ApiDoc, ApiParamDoc
from endpoint_doc_merger.output.formatters import BaseFormatter, register_formatter


@register_formatter("text")
class TextFormatter(BaseFormatter):
    """
    Format output as human-readable text using Rich.
    """

    def __init__(self, colorize: bool = True) -> None:
        """
        Initialize the text formatter.

        Args:
            colorize: Whether to use colors in output.
        """
        self.colorize = colorize

    def _params(self, params: list[ApiParamDoc]) -> str:
        parts = []
        for param in params:
            part = param.name
            if param.required == "false":
                part += "?"
            if param.default_value is not None:
                part += f"={param.default_value}"
            parts.append(part)
        return ", ".join(parts)

    def format_docs(self, docs: list[ApiDoc]) -> str:
        """Format controller documentation as one table per controller."""
        output = StringIO()
        console = Console(file=output, force_terminal=self.colorize, width=120)

        if not docs:
            console.print("[dim]No controllers found.[/dim]")
            return output.getvalue()

        total = 0
        for doc in docs:
            table = Table(title=doc.name, show_header=True, header_style="bold")
            table.add_column("Verb", style="cyan")
            table.add_column("Path", style="green")
            table.add_column("Produces")
            table.add_column("Consumes")
            table.add_column("Headers", style="yellow")
            table.add_column("Parameters", style="dim")
            table.add_column("Response", style="magenta")

            for method in doc.methods:
                params = self._params(method.path_parameters + method.query_parameters)
                response = method.response.jsondoc_type.render() if method.response else ""
                table.add_row(
                    method.verb.value,
                    method.path,
                    ", ".join(method.produces),
                    ", ".join(method.consumes),
                    ", ".join(header.name for header in method.headers),
                    params,
                    response,
                )

            total += len(doc.methods)
            console.print(table)

        console.print(f"\nTotal: {total} endpoints in {len(docs)} controllers")

        return output.getvalue()
