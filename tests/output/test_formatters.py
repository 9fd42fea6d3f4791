"""Tests for result formatting."""

from __future__ import annotations

import json

from zuora.output.formatters import OutputSettings, format_result
from zuora.services.result import OperationError, OperationResult


class TestJsonOutput:
    def test_json_mode(self) -> None:
        result = OperationResult(ok=True, op="find", id="p1", data={"Name": "Gold"})
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["op"] == "find"
        assert parsed["data"] == {"Name": "Gold"}
        assert "meta" not in parsed

    def test_json_errors(self) -> None:
        result = OperationResult(
            ok=False, op="query", errors=[OperationError(code="INVALID_FIELD", message="bad field")]
        )
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["errors"] == [{"code": "INVALID_FIELD", "message": "bad field"}]


class TestHumanOutput:
    def test_default_is_human(self) -> None:
        result = OperationResult(ok=True, op="create", id="abc123")
        output = format_result(result)
        assert output.startswith("OK")
        assert "abc123" in output

    def test_error_line(self) -> None:
        result = OperationResult(
            ok=False, op="find", errors=[OperationError(code="NOT_FOUND", message="No Product with Id x")]
        )
        assert format_result(result) == "ERROR  find: No Product with Id x"
