import json

from typer.testing import CliRunner

from deferpack.cli.app import app


def test_cli_inspect_lists_recorded_calls() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["inspect", "tests.fixtures.surfaces:build_session"])

    assert result.exit_code == 0, result.stdout + result.stderr
    lines = result.stdout.strip().splitlines()
    assert lines[0] == "session fixture-session (Root): 6 recorded call(s)"
    assert lines[1] == "  #1 Root.install('plugin', eager=True) [root]"
    assert lines[3] == "  #3 Builder.named('x') [chained from #2]"
    assert lines[-1] == "  #6 Writer.write('hello') [chained from #5]"


def test_cli_inspect_accepts_deferred_module_class() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["inspect", "tests.fixtures.surfaces:WiringModule", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "ok"
    assert payload["surface"] == "Root"
    assert payload["session_id"].startswith("WiringModule-")
    assert [item["selector"] for item in payload["invocations"]] == [
        "Root.a",
        "Builder.named",
        "Builder.to",
        "Root.open",
        "Writer.write",
    ]


def test_cli_inspect_reports_unresolvable_target() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["inspect", "tests.fixtures.surfaces:missing", "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout.strip())
    assert payload["status"] == "error"
    assert "Could not find attribute 'missing'" in payload["message"]


def test_cli_inspect_rejects_non_session_target() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["inspect", "tests.fixtures.surfaces:build_target"])

    assert result.exit_code == 1
    combined = result.stdout + result.stderr
    assert "did not resolve to a RecordingSession or DeferredModule" in combined


def test_cli_inspect_reports_module_failing_while_recording() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["inspect", "tests.fixtures.surfaces:MisconfiguredModule"])

    assert result.exit_code == 1
    assert not isinstance(result.exception, TypeError)
    combined = result.stdout + result.stderr
    assert "MisconfiguredModule failed while recording: TypeError" in combined
    assert "missing a required argument: 'module'" in combined


def test_cli_surface_lists_operations() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["surface", "tests.fixtures.surfaces:Root"])

    assert result.exit_code == 0, result.stdout + result.stderr
    lines = result.stdout.strip().splitlines()
    assert lines[0] == "surface Root: 5 operation(s)"
    assert "  a() -> Builder [chainable]" in lines
    assert "  count() -> int [unsupported]" in lines
    assert any(line.startswith("  install(module: object, *, eager: bool = False)") for line in lines)


def test_cli_surface_json_and_non_surface_target() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["surface", "tests.fixtures.surfaces:Writer", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert [item["name"] for item in payload["operations"]] == ["flush", "write"]
    assert {item["result_kind"] for item in payload["operations"]} == {"void"}

    rejected = runner.invoke(app, ["surface", "tests.fixtures.surfaces:RealRoot"])
    assert rejected.exit_code == 2
    assert "is not a capability surface" in rejected.stdout + rejected.stderr
