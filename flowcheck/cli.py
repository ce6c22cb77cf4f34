#!/usr/bin/env python3
# flowcheck/cli.py

import glob as _glob
from pathlib import Path
from typing import Optional

import typer
from jsonschema.exceptions import SchemaError

from flowcheck.agent_request import AgentNameRejected, WorkflowRejected, debug_workflow_json, prepare_create_request
from flowcheck.config import ValidatorOptions
from flowcheck.structural.parser import project_document
from flowcheck.structural.registry import SchemaRegistry, default_registry
from flowcheck.structural.result import Scope
from flowcheck.structural.schema import WORKFLOW_SCHEMA
from flowcheck.utils.graph import build_graph, graph_summary
from flowcheck.utils.io import dump_json, read_bytes, write_json
from flowcheck.utils.logger import LEVEL_NAMES, get_logger, init_logger, parse_level

app = typer.Typer(help="flowcheck CLI - Validate agent workflow definitions before agent creation")
logger = get_logger("cli")


def _load_registry(schemas: Optional[Path]) -> SchemaRegistry:
    if schemas is None:
        return default_registry()
    try:
        return SchemaRegistry.load_json(schemas)
    except (OSError, ValueError, SchemaError) as exc:
        # SchemaError.message is the short reason; str() dumps the whole schema
        reason = getattr(exc, "message", None) or str(exc)
        typer.echo(f"[error] cannot load node type schemas from {schemas}: {reason}", err=True)
        raise typer.Exit(code=2)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG | INFO | WARNING | ERROR (env: FLOWCHECK_LOG_LEVEL)"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", file_okay=False, help="Also log to a rotating file in this directory"),
):
    """
    Validate agent workflow definitions (nodes, edges, per-node-type config).
    """
    if log_level is None and log_dir is None:
        return
    if log_level is not None and log_level.strip().upper() not in LEVEL_NAMES:
        raise typer.BadParameter(f"Invalid log level '{log_level}'. Choose one of: {', '.join(LEVEL_NAMES)}")
    init_logger(level=parse_level(log_level) if log_level else None, log_dir=log_dir)


def _options(strict_types: Optional[bool], unique_ids: Optional[bool]) -> ValidatorOptions:
    return ValidatorOptions.from_env().override(
        check_config_types=strict_types,
        check_duplicate_ids=unique_ids,
    )


@app.command()
def validate(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True, dir_okay=False, help="Path to workflow JSON"),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a JSON report to this path"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON instead of text"),
    strict_types: Optional[bool] = typer.Option(None, "--strict-types/--no-strict-types", help="Check config value types against node type schemas (env: FLOWCHECK_CHECK_CONFIG_TYPES)"),
    unique_ids: Optional[bool] = typer.Option(None, "--unique-ids/--allow-duplicate-ids", help="Report duplicate node ids (env: FLOWCHECK_CHECK_DUPLICATE_IDS)"),
    schemas: Optional[Path] = typer.Option(None, "--schemas", exists=True, readable=True, dir_okay=False, help="JSON file with extra node type schemas"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show graph summary"),
):
    """
    Validate one workflow file. Exit code 0 when valid, 1 otherwise.
    """
    registry = _load_registry(schemas)
    options = _options(strict_types, unique_ids)

    debug = debug_workflow_json(read_bytes(input), registry=registry, options=options)
    result = debug.validation_result

    graph = None
    if debug.parsed is not None:
        graph = graph_summary(build_graph(project_document(debug.parsed)))

    if as_json:
        print(dump_json(result.to_dict()))
    else:
        print(f"Valid: {result.valid}")
        if result.errors:
            print("Detected issues:")
            for e in result.errors:
                print(f"- {e.message}")

    if verbose:
        if graph is not None:
            print("[debug] graph:", graph)
        else:
            print("[debug] graph: <none>")
        print("[debug] options:", options)

    if report is not None:
        payload = {
            "input": str(input),
            "valid": result.valid,
            "errors": result.messages,
            "error_detail": [e.to_dict() for e in result.errors],
            "graph": graph or {},
        }
        write_json(report, payload)
        print(f"[ok] wrote report to {report}")

    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def bench(
    glob: str = typer.Option("bench/validator/*/workflow.*", "--glob", help="Glob for workflow files"),
    out: Path = typer.Option(Path("experiments/results/validator.csv"), "--out", help="CSV path to write results"),
    strict_types: Optional[bool] = typer.Option(None, "--strict-types/--no-strict-types", help="Check config value types"),
    unique_ids: Optional[bool] = typer.Option(None, "--unique-ids/--allow-duplicate-ids", help="Report duplicate node ids"),
    schemas: Optional[Path] = typer.Option(None, "--schemas", exists=True, readable=True, dir_okay=False, help="JSON file with extra node type schemas"),
):
    """
    Batch validate workflows and export a CSV report.
    """
    import pandas as pd

    registry = _load_registry(schemas)
    options = _options(strict_types, unique_ids)

    rows = []
    for fp_str in sorted(_glob.glob(glob)):
        fp = Path(fp_str)
        result = debug_workflow_json(read_bytes(fp), registry=registry, options=options).validation_result
        row = {
            "id": fp.parent.name,
            "file": str(fp),
            "valid": result.valid,
            "n_errors": len(result.errors),
        }
        for scope in (Scope.PARSE, Scope.DOCUMENT, Scope.NODE, Scope.EDGE, Scope.CONTRACT):
            row[scope.value] = len(result.by_scope(scope))
        row["errors"] = "; ".join(result.messages)
        rows.append(row)

    if not rows:
        logger.warning("no workflow files matched %s", glob)

    columns = ["id", "file", "valid", "n_errors", "parse", "document", "node", "edge", "contract", "errors"]
    out.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows, columns=columns).to_csv(out, index=False)
    print(f"[ok] wrote {out} ({len(rows)} workflow(s))")


@app.command()
def request(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True, dir_okay=False, help="Path to workflow JSON"),
    name: Optional[str] = typer.Option(None, "--name", help="Agent name (defaults to the workflow name)"),
    description: Optional[str] = typer.Option(None, "--description", help="Agent description (defaults to the workflow description)"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the request JSON here instead of stdout"),
    strict_types: Optional[bool] = typer.Option(None, "--strict-types/--no-strict-types", help="Check config value types against node type schemas (env: FLOWCHECK_CHECK_CONFIG_TYPES)"),
    unique_ids: Optional[bool] = typer.Option(None, "--unique-ids/--allow-duplicate-ids", help="Report duplicate node ids (env: FLOWCHECK_CHECK_DUPLICATE_IDS)"),
    schemas: Optional[Path] = typer.Option(None, "--schemas", exists=True, readable=True, dir_okay=False, help="JSON file with extra node type schemas"),
):
    """
    Validate a workflow and emit the create-agent request built from it.
    """
    registry = _load_registry(schemas)
    try:
        payload = prepare_create_request(
            read_bytes(input),
            name=name,
            description=description,
            registry=registry,
            options=_options(strict_types, unique_ids),
        )
    except (WorkflowRejected, AgentNameRejected) as exc:
        print(str(exc))
        raise typer.Exit(code=1)

    if out is None:
        print(dump_json(payload))
    else:
        write_json(out, payload)
        print(f"[ok] wrote request to {out}")


@app.command()
def schema(
    node_type: Optional[str] = typer.Option(None, "--node-type", "-t", help="Only print this node type's config schema"),
    schemas: Optional[Path] = typer.Option(None, "--schemas", exists=True, readable=True, dir_okay=False, help="JSON file with extra node type schemas"),
):
    """
    Print the workflow schema and the node type catalog.
    """
    registry = _load_registry(schemas)
    if node_type is None:
        print(dump_json({"workflow": WORKFLOW_SCHEMA, "node_types": registry.describe()}))
        return

    entry = registry.lookup(node_type)
    if entry is None:
        raise typer.BadParameter(
            f"Unknown node type '{node_type}'. Choose one of: {', '.join(sorted(registry))}"
        )
    print(dump_json(entry.to_json_schema()))


if __name__ == "__main__":
    app()
