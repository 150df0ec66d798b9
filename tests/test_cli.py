import orjson
import pytest

from calendar_mcp import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda **_: None)


def _run(argv) -> int:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    return excinfo.value.code


def test_tools_lists_every_tool(capsys) -> None:
    assert _run(["tools"]) == 0
    listing = orjson.loads(capsys.readouterr().out)
    assert len(listing["tools"]) == 13
    assert all(set(tool) == {"name", "description", "inputSchema"} for tool in listing["tools"])


def test_unknown_tool_exits_non_zero(capsys) -> None:
    assert _run(["call", "unknown_tool"]) == 1
    assert "Unknown tool: unknown_tool" in capsys.readouterr().out


def test_invalid_json_arguments(capsys) -> None:
    assert _run(["call", "calendar_search", "--args", "{not json"]) == 2
    assert "not valid JSON" in capsys.readouterr().err


@pytest.mark.usefixtures("bound_api")
def test_call_prints_response_text(capsys, runner) -> None:
    assert _run(["call", "calendar_open_date", "--args", '{"date": "2025-01-15"}']) == 0
    assert orjson.loads(capsys.readouterr().out) == {"success": True, "date": "2025-01-15"}
    assert "switch view to day view" in runner.scripts[0]
