import json
from importlib.metadata import PackageNotFoundError, version as package_version
from dataclasses import dataclass
from typing import Any

import typer

from deferpack.capture import CaptureError, DeferredModule, RecordingSession
from deferpack.core import EntrypointError, resolve_entrypoint, surface_of
from deferpack.replay import ReplayError

app = typer.Typer(help="DeferKit CLI")


class SessionLoadError(RuntimeError):
    """Raised when a resolved target fails while recording its session."""


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("deferkit")
    except PackageNotFoundError:
        from deferkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show DeferKit version and exit.",
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Suppress non-error text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI color output."),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any]) -> None:
    compact = _OUTPUT_OPTIONS.stable_json
    rendered = json.dumps(
        payload,
        ensure_ascii=True,
        sort_keys=True,
        indent=None if compact else 2,
        separators=(",", ":") if compact else None,
    )
    typer.echo(rendered, color=not _OUTPUT_OPTIONS.no_color)


def _fail(message: str, *, json_output: bool, exit_code: int, **extra: Any) -> typer.Exit:
    if json_output:
        _echo_json({"status": "error", "exit_code": exit_code, "message": message, **extra})
    else:
        _echo(message, err=True)
    return typer.Exit(code=exit_code)


def _load_session(target: str) -> RecordingSession:
    """Resolve ``module:attribute`` to a recording session.

    Accepts a session, a DeferredModule class or instance, or a zero-argument
    callable returning either. Calls are recorded while the target is built, so
    any failure there is reported as :class:`SessionLoadError`.
    """
    resolved = resolve_entrypoint(target)
    if callable(resolved) and not isinstance(resolved, (RecordingSession, DeferredModule)):
        try:
            resolved = resolved()
        except Exception as error:
            raise SessionLoadError(
                f"{target} failed while recording: {type(error).__name__}: {error}"
            ) from error

    if isinstance(resolved, DeferredModule):
        return resolved.session
    if isinstance(resolved, RecordingSession):
        return resolved
    raise EntrypointError(
        f"{target} did not resolve to a RecordingSession or DeferredModule "
        f"(got {type(resolved).__name__})."
    )


@app.command()
def inspect(
    target: str = typer.Argument(..., help="Session source as module:attribute."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """List the calls a session recorded, without replaying them."""
    try:
        session = _load_session(target)
    except (EntrypointError, SessionLoadError) as error:
        raise _fail(f"inspect failed: {error}", json_output=json_output, exit_code=1) from error

    pending = session.snapshot()
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "target": target,
                "session_id": session.session_id,
                "surface": session.surface.name,
                "state": session.state,
                "invocations": [invocation.to_dict() for invocation in pending],
            }
        )
        return

    _echo(f"session {session.session_id} ({session.surface.name}): {len(pending)} recorded call(s)")
    for invocation in pending:
        role = "root" if invocation.root else f"chained from #{invocation.parent_index}"
        _echo(f"  #{invocation.index} {invocation.describe()} [{role}]")


@app.command()
def surface(
    surface_type: str = typer.Argument(..., help="Surface type as module:attribute."),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """Show which operations of a surface can be recorded and what they return."""
    try:
        described = surface_of(resolve_entrypoint(surface_type))
    except (EntrypointError, TypeError) as error:
        raise _fail(f"surface failed: {error}", json_output=json_output, exit_code=2) from error

    operations = [described.operations[name] for name in sorted(described.operations)]
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "surface": described.name,
                "operations": [
                    {
                        "name": operation.selector.name,
                        "signature": str(operation.signature),
                        "result_kind": operation.result_kind,
                        "result": operation.describe_result(),
                    }
                    for operation in operations
                ],
            }
        )
        return

    _echo(f"surface {described.name}: {len(operations)} operation(s)")
    for operation in operations:
        _echo(
            f"  {operation.selector.name}{operation.signature} -> "
            f"{operation.describe_result()} [{operation.result_kind}]"
        )


@app.command()
def replay(
    target: str = typer.Argument(..., help="Session source as module:attribute."),
    into: str = typer.Option(
        ...,
        "--into",
        help="Zero-argument factory (module:attribute) building the real target.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable output."),
) -> None:
    """Replay a recorded session against a freshly built real target."""
    try:
        factory = resolve_entrypoint(into)
        if not callable(factory):
            raise EntrypointError(f"{into} is not callable")
        session = _load_session(target)
    except EntrypointError as error:
        raise _fail(f"replay failed: {error}", json_output=json_output, exit_code=2) from error
    except SessionLoadError as error:
        raise _fail(f"replay failed: {error}", json_output=json_output, exit_code=1) from error

    try:
        real_target = factory()
    except Exception as error:
        raise _fail(
            f"replay failed: could not build target with {into}: {error}",
            json_output=json_output,
            exit_code=1,
        ) from error

    try:
        report = session.replay(real_target)
    except (ReplayError, CaptureError) as error:
        raise _fail(
            f"replay failed: {error}",
            json_output=json_output,
            exit_code=1,
            session_id=session.session_id,
        ) from error

    if json_output:
        _echo_json({**report.to_dict(), "status": "ok", "exit_code": 0, "target": target})
        return
    _echo(
        f"replay completed: {report.executed_count} call(s) "
        f"against {report.surface} (session {report.session_id})"
    )
