"""Printer for query results - table, wide, JSON and YAML output."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, TextIO

import yaml
from rich.console import Console
from rich.table import Table

from podson.constants.enums import OutputFormat
from podson.constants.values import POD_KIND
from podson.errors import UnsupportedOutputError
from podson.models.core.pod_info import PodInfo, PodRow
from podson.models.query.result_set import PodResultSet
from podson.utils.duration import age

logger = logging.getLogger(__name__)


class PodPrinter:
    """Render a result set in one output format."""

    COLUMNS = ("NODE", "NAMESPACE", "NAME", "PHASE", "AGE")
    WIDE_COLUMNS = (*COLUMNS, "IP")
    _COLUMN_GAP = 3

    def __init__(
        self,
        output: OutputFormat = OutputFormat.TABLE,
        no_headers: bool = False,
        console: Console | None = None,
    ) -> None:
        if output == OutputFormat.NAME:
            raise UnsupportedOutputError(
                "output format 'name' is not supported since the format "
                "doesn't contain namespace references"
            )
        self.output = output
        self.no_headers = no_headers
        self.console = console or Console(highlight=False, soft_wrap=True)

    @staticmethod
    def to_rows(pods: list[PodInfo], now: datetime | None = None) -> list[PodRow]:
        """Build one row per pod, always carrying node and namespace."""
        now = now or datetime.now(timezone.utc)
        return [
            PodRow(
                node=pod.node_name,
                namespace=pod.namespace,
                name=pod.name,
                status=pod.phase,
                age=age(pod.creation_timestamp, now),
                ip=pod.pod_ip,
            )
            for pod in pods
        ]

    @staticmethod
    def to_list_document(result: PodResultSet) -> dict[str, Any]:
        """Wrap the pods in a v1 List, as kubectl does for structured output."""
        items = []
        for pod in result.pods:
            obj = {"apiVersion": "v1", "kind": POD_KIND}
            obj.update(pod.raw)
            items.append(obj)
        return {
            "apiVersion": "v1",
            "kind": "List",
            "metadata": {"resourceVersion": result.resource_version},
            "items": items,
        }

    def build_table(self, rows: list[PodRow]) -> Table:
        """Build a borderless kubectl-style table."""
        wide = self.output == OutputFormat.WIDE
        columns = self.WIDE_COLUMNS if wide else self.COLUMNS
        table = Table(
            box=None,
            show_header=not self.no_headers,
            show_edge=False,
            pad_edge=False,
            padding=(0, self._COLUMN_GAP, 0, 0),
            header_style="none",
        )
        for column in columns:
            table.add_column(column, no_wrap=True, overflow="ignore")
        for row in rows:
            cells = [row.node, row.namespace, row.name, row.status, row.age]
            if wide:
                cells.append(row.ip or "<none>")
            table.add_row(*cells)
        return table

    def _table_width(self, table: Table) -> int:
        widths = [len(column.header) if table.show_header else 0 for column in table.columns]
        for index, column in enumerate(table.columns):
            for cell in column.cells:
                widths[index] = max(widths[index], len(str(cell)))
        return sum(widths) + self._COLUMN_GAP * len(widths)

    def render(self, result: PodResultSet) -> str:
        """Render structured formats to a string."""
        if self.output == OutputFormat.JSON:
            return json.dumps(self.to_list_document(result), indent=4) + "\n"
        if self.output == OutputFormat.YAML:
            return yaml.safe_dump(self.to_list_document(result), sort_keys=False, default_flow_style=False)
        raise UnsupportedOutputError(f"output format {self.output.value!r} is not a document format")

    def print(self, result: PodResultSet, file: TextIO | None = None) -> None:
        """Print the result to the console (or ``file``)."""
        if self.output in (OutputFormat.JSON, OutputFormat.YAML):
            text = self.render(result)
            if file is not None:
                file.write(text)
            else:
                self.console.out(text, end="", highlight=False)
            return

        if not result.pods:
            logger.warning("No resources found")
            return
        table = self.build_table(self.to_rows(result.pods))
        width = max(self.console.width, self._table_width(table))
        if file is not None:
            Console(file=file, width=width, highlight=False, soft_wrap=True).print(table)
        else:
            self.console.print(table, width=width)
