"""Tests for the result printer."""

from __future__ import annotations

import io
import json
import logging
from datetime import datetime, timedelta, timezone

import pytest
import yaml

from podson.constants.enums import OutputFormat
from podson.controllers.pods.parsers.pod_parser import PodParser
from podson.errors import UnsupportedOutputError
from podson.models.query.result_set import PodResultSet
from podson.utils.printer import PodPrinter


@pytest.fixture
def result(pod_factory) -> PodResultSet:
    parser = PodParser()
    first = pod_factory("app-1", "h1", namespace="prod")
    second = pod_factory("app-2", "h2", namespace="prod", phase="Pending")
    del second["status"]["podIP"]
    return PodResultSet(
        pods=[parser.parse_pod(first), parser.parse_pod(second)],
        resource_version="123",
    )


def _print(printer: PodPrinter, result: PodResultSet) -> str:
    buffer = io.StringIO()
    printer.print(result, file=buffer)
    return buffer.getvalue()


class TestPodPrinter:
    """Tests for PodPrinter class."""

    def test_name_output_is_rejected(self) -> None:
        with pytest.raises(UnsupportedOutputError, match="doesn't contain namespace references"):
            PodPrinter(OutputFormat.NAME)

    def test_to_rows(self, result) -> None:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(hours=5)
        rows = PodPrinter.to_rows(result.pods, now=now)

        assert [(row.node, row.namespace, row.name, row.status, row.age) for row in rows] == [
            ("h1", "prod", "app-1", "Running", "5h"),
            ("h2", "prod", "app-2", "Pending", "5h"),
        ]
        assert rows[0].ip == "10.0.0.1"
        assert rows[1].ip == ""

    def test_table_output(self, result) -> None:
        lines = _print(PodPrinter(), result).splitlines()

        assert lines[0].split() == ["NODE", "NAMESPACE", "NAME", "PHASE", "AGE"]
        assert lines[1].split()[:4] == ["h1", "prod", "app-1", "Running"]
        assert lines[2].split()[:4] == ["h2", "prod", "app-2", "Pending"]
        assert len(lines) == 3

    def test_wide_output_adds_ip(self, result) -> None:
        lines = _print(PodPrinter(OutputFormat.WIDE), result).splitlines()

        assert lines[0].split() == ["NODE", "NAMESPACE", "NAME", "PHASE", "AGE", "IP"]
        assert lines[1].split()[-1] == "10.0.0.1"
        assert lines[2].split()[-1] == "<none>"

    def test_no_headers(self, result) -> None:
        lines = _print(PodPrinter(no_headers=True), result).splitlines()

        assert len(lines) == 2
        assert lines[0].split()[0] == "h1"

    def test_empty_table_logs_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            output = _print(PodPrinter(), PodResultSet())

        assert output == ""
        assert "No resources found" in caplog.text

    def test_json_output(self, result) -> None:
        document = json.loads(_print(PodPrinter(OutputFormat.JSON), result))

        assert document["apiVersion"] == "v1"
        assert document["kind"] == "List"
        assert document["metadata"] == {"resourceVersion": "123"}
        assert [item["metadata"]["name"] for item in document["items"]] == ["app-1", "app-2"]
        assert document["items"][0]["kind"] == "Pod"
        assert document["items"][0]["apiVersion"] == "v1"

    def test_json_output_for_empty_result(self) -> None:
        document = json.loads(_print(PodPrinter(OutputFormat.JSON), PodResultSet()))
        assert document["items"] == []

    def test_yaml_output(self, result) -> None:
        document = yaml.safe_load(_print(PodPrinter(OutputFormat.YAML), result))

        assert document["kind"] == "List"
        assert document["items"][1]["spec"]["nodeName"] == "h2"

    def test_render_requires_document_format(self, result) -> None:
        with pytest.raises(UnsupportedOutputError):
            PodPrinter(OutputFormat.TABLE).render(result)
