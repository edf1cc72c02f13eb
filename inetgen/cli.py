"""Command-line interface for inetgen."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from statistics import median
from time import perf_counter
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from inetgen.dsl.loader import load_batch_yaml
from inetgen.errors import (
    ErrorCode,
    GenerationError,
    NetworkFormatError,
    NetworkWriteError,
)
from inetgen.generator import generate_network
from inetgen.io.reader import ParsedNetwork, read_network
from inetgen.io.writer import write_network
from inetgen.logging import configure_cli_logging, get_logger
from inetgen.model.parameters import GenerationParameters
from inetgen.utils.output_paths import (
    ensure_parent_dir,
    instance_path,
    manifest_path,
)

logger = get_logger(__name__)

#: Exit status per generation failure code.
EXIT_STATUS: Dict[ErrorCode, int] = {
    ErrorCode.BAD_SEED: 11,
    ErrorCode.TOO_BIG: 12,
    ErrorCode.BAD_PARMS: 13,
    ErrorCode.ALLOCATION_FAILURE: 14,
}
#: Exit status when the output file cannot be written.
EXIT_WRITE_FAILURE = 20
#: Exit status for unreadable inputs and partially failed batches.
EXIT_FAILURE = 1


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _stats_rows(values: List[int]) -> List[List[str]]:
    return [
        ["Min", f"{min(values):,}"],
        ["Max", f"{max(values):,}"],
        ["Mean", f"{sum(values) / len(values):,.1f}"],
        ["Median", f"{median(values):,.1f}"],
    ]


def _generation_exit(exc: GenerationError) -> None:
    logger.error(f"Generation failed ({exc.code.name}): {exc}")
    print(f"❌ ERROR: {exc}")
    sys.exit(EXIT_STATUS[exc.code])


def _generate(output: Path, parameters: GenerationParameters) -> None:
    """Generate one network and write it to ``output``.

    Exits with the status from ``EXIT_STATUS`` on generation failure and with
    ``EXIT_WRITE_FAILURE`` when the file cannot be written. Nothing is
    written unless generation succeeds.
    """
    logger.info(f"Generating network with seed {parameters.seed}")
    _start_time = perf_counter()

    try:
        generated = generate_network(parameters)
    except GenerationError as exc:
        _generation_exit(exc)
        return

    try:
        write_network(generated, output)
    except NetworkWriteError as exc:
        logger.error(str(exc))
        print(f"❌ ERROR: {exc}")
        sys.exit(EXIT_WRITE_FAILURE)

    summary = generated.summary()
    _elapsed = perf_counter() - _start_time
    logger.info(
        f"Generated {summary['arcs']:,} arcs and {summary['interdependencies']:,} "
        f"interdependencies in {_format_duration(_elapsed)}"
    )
    print(f"✅ Network written to: {output}")


def _print_parsed_network(parsed: ParsedNetwork, detail: bool) -> None:
    kind = "minimum cost flow" if parsed.problem == "min" else "maximum flow"
    print(f"   Problem: {kind}")
    print(f"   Nodes: {parsed.nodes:,}")
    print(f"   Arcs: {parsed.arc_count:,}")

    if parsed.problem == "max":
        print(f"   Sources: {len(parsed.sources):,}")
        print(f"   Sinks: {len(parsed.sinks):,}")
    else:
        mode = "-"
        if parsed.parent_mode is not None:
            mode = parsed.parent_mode.name.lower()
        inter = len(parsed.interdependencies)
        print(f"   Interdependencies: {inter:,} ({mode} {_plural(inter, 'parent')})")
        print(f"   Total supply: {parsed.total_supply():,}")
        print(f"   Total demand: {parsed.total_demand():,}")
        delivery = parsed.delivery_arcs()
        if delivery:
            carried = sum(parsed.arcs[i - 1].capacity for i in delivery)
            print(
                f"   Delivery arcs: {len(delivery):,} carrying {carried:,} units"
            )

    if parsed.arcs:
        print("\n   Arc Capacity Statistics:")
        capacities = [a.capacity for a in parsed.arcs]
        print(_format_table(["Metric", "Value"], _stats_rows(capacities)))
        costs = [a.cost for a in parsed.arcs if a.cost is not None and a.head != 0]
        if costs:
            print("\n   Arc Cost Statistics:")
            print(_format_table(["Metric", "Value"], _stats_rows(costs)))

    if detail and parsed.interdependencies:
        print("\n   Interdependencies:")
        rows = [
            [str(parent), str(child)] for parent, child in parsed.interdependencies
        ]
        print(_format_table(["Parent", "Child"], rows))


def _inspect_network(path: Path, detail: bool = False) -> None:
    """Parse a network file and print a summary.

    Args:
        path: Network file.
        detail: Whether to list every interdependency.
    """
    logger.info(f"Inspecting network from: {path}")
    try:
        parsed = read_network(path)
    except FileNotFoundError:
        print(f"❌ ERROR: Network file not found: {path}")
        sys.exit(EXIT_FAILURE)
    except NetworkFormatError as exc:
        logger.error(f"Failed to parse network: {exc}")
        print("❌ ERROR: Failed to parse network")
        print(f"  {type(exc).__name__}: {exc}")
        sys.exit(EXIT_FAILURE)

    print("\n" + "=" * 60)
    print("NETWORK INSPECTION")
    print("=" * 60)
    _print_parsed_network(parsed, detail)


def _run_batch(path: Path, output_dir: Optional[Path]) -> None:
    """Generate every instance of a batch file and write a manifest.

    Failed instances are recorded in the manifest with their error code; the
    command then exits with ``EXIT_FAILURE``.
    """
    logger.info(f"Loading batch from: {path}")
    _start_time = perf_counter()
    try:
        batch = load_batch_yaml(path.read_text())
    except FileNotFoundError:
        print(f"❌ ERROR: Batch file not found: {path}")
        sys.exit(EXIT_FAILURE)
    except (
        ValueError,
        GenerationError,
        jsonschema.ValidationError,
        yaml.YAMLError,
    ) as exc:
        logger.error(f"Failed to load batch: {exc}")
        print(f"❌ ERROR: Failed to load batch: {type(exc).__name__}: {exc}")
        sys.exit(EXIT_FAILURE)

    prefix = batch.prefix or path.stem
    entries: List[Dict[str, Any]] = []
    failures = 0
    for index in range(batch.instances):
        try:
            parameters = batch.instance_parameters(index)
        except GenerationError as exc:
            _generation_exit(exc)
            return
        target = instance_path(output_dir, prefix, index)
        entry: Dict[str, Any] = {
            "index": index,
            "seed": parameters.seed,
            "path": str(target),
        }
        try:
            generated = generate_network(parameters)
            ensure_parent_dir(target)
            write_network(generated, target)
        except GenerationError as exc:
            failures += 1
            logger.warning(f"Instance {index} (seed {parameters.seed}) failed: {exc}")
            entry.update(status="failed", code=int(exc.code), error=str(exc))
        except NetworkWriteError as exc:
            logger.error(str(exc))
            print(f"❌ ERROR: {exc}")
            sys.exit(EXIT_WRITE_FAILURE)
        else:
            entry.update(status="ok", **generated.summary())
            logger.debug(f"Instance {index} written to {target}")
        entries.append(entry)

    manifest = manifest_path(output_dir, prefix)
    ensure_parent_dir(manifest)
    manifest.write_text(
        json.dumps({"seed": batch.seed, "instances": entries}, indent=2)
    )

    _elapsed = perf_counter() - _start_time
    done = batch.instances - failures
    logger.info(
        f"Batch completed: {done}/{batch.instances} "
        f"{_plural(batch.instances, 'instance')} in {_format_duration(_elapsed)}"
    )
    print(f"✅ Manifest written to: {manifest}")
    if failures:
        print(f"❌ ERROR: {failures} {_plural(failures, 'instance')} failed")
        sys.exit(EXIT_FAILURE)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``inetgen`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="inetgen",
        description="Generate min-cost flow networks with interdependencies.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{generate,inspect,batch}",
        help="Available commands",
    )

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Generate one network file"
    )
    generate_parser.add_argument("output", type=Path, help="Output network file")
    for name in GenerationParameters.field_names():
        generate_parser.add_argument(
            name,
            type=int,
            metavar=name.replace("_", "").upper(),
            help="0 = sink-node parents, 1 = arc parents" if name == "parent" else None,
        )

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect", help="Parse a network file and summarize it"
    )
    inspect_parser.add_argument("network", type=Path, help="Path to network file")
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="List every interdependency",
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        "batch", help="Generate several instances from a YAML batch file"
    )
    batch_parser.add_argument("batch", type=Path, help="Path to batch YAML")
    batch_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output directory for network files and the manifest (default: CWD)",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if configure_cli_logging(args.verbose, args.quiet) == logging.DEBUG:
        logger.debug("Debug logging enabled")

    if args.command == "generate":
        values = {
            name: getattr(args, name) for name in GenerationParameters.field_names()
        }
        _generate(args.output, GenerationParameters(**values))
    elif args.command == "inspect":
        _inspect_network(args.network, args.detail)
    elif args.command == "batch":
        _run_batch(args.batch, args.output)


if __name__ == "__main__":
    main()
