import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import colorlog
import yaml

from rowquery import __version__ as _PACKAGE_VERSION
from rowquery.core.enums import ResultKind

# Result kind choices for argparse
RESULT_CHOICES = [k.value for k in ResultKind]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _parse_conditions(pairs: Optional[List[str]]) -> Dict[str, Any]:
    """Parse repeated ``field=value`` options into a conditions mapping.

    Values are read as YAML scalars: ``3`` is an int, ``true`` a bool, ``null``
    None, ``[a, b]`` a list. Dotted names nest: ``permissions.admin=true``
    becomes ``{"permissions": {"admin": True}}``.
    """
    conditions: Dict[str, Any] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Invalid condition '{pair}'. Expected field=value")
        name, raw = pair.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid condition '{pair}'. Field name is empty")
        try:
            value = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid condition value in '{pair}': {e}") from e

        *parents, leaf = name.split(".")
        target = conditions
        for parent in parents:
            target = target.setdefault(parent, {})
            if not isinstance(target, dict):
                raise ValueError(f"Conflicting conditions for '{name}'")
        if isinstance(target.get(leaf), dict) and not isinstance(value, dict):
            raise ValueError(f"Conflicting conditions for '{name}'")
        target[leaf] = value
    return conditions


def cmd_query(args: argparse.Namespace) -> int:
    """Run a query over a records file and print the JSON payload.

    Options given on the command line override the plan file.

    Returns:
        0 on success
        1 if the input holds no records
        2 on invalid input, plan or arguments
    """
    from rowquery.core.errors import InvalidArgumentError
    from rowquery.core.query import QueryPlan, build_query, load_plan, load_records
    from rowquery.core.query.materialize import materialize_result

    try:
        records = load_records(args.input)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Failed to load records: %s", e)
        return 2

    if not records:
        logging.warning("No records found in %s", args.input)
        return 1
    logging.info("Loaded %d records from %s", len(records), args.input)

    try:
        plan = load_plan(args.plan) if getattr(args, "plan", None) else QueryPlan()
        plan = plan.merge(
            select=getattr(args, "select", None),
            where=_parse_conditions(getattr(args, "where", None)),
            filter_where=_parse_conditions(getattr(args, "filter_where", None)),
            order_by=getattr(args, "order_by", None),
            skip=getattr(args, "skip", None),
            limit=getattr(args, "limit", None),
            result=getattr(args, "result", None),
        )
        query = build_query(records, plan)
        payload = materialize_result(query, plan.result)
    except (FileNotFoundError, ValueError) as e:
        # InvalidArgumentError is a ValueError
        level = "argument" if isinstance(e, InvalidArgumentError) else "plan"
        logging.error("Invalid %s: %s", level, e)
        return 2

    if payload["truncated"]:
        logging.warning("Result truncated to %d rows", len(payload["data"]))

    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    output = getattr(args, "output", None)
    if output:
        out_path = Path(output)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            logging.error("Failed writing output %s: %s", out_path, e)
            return 2
        logging.info("Saved result JSON: %s", out_path)
    else:
        print(text)
    return 0


def cmd_fields(args: argparse.Namespace) -> int:
    """Print the record count and the fields of the first record."""
    from rowquery.core.query import load_records
    from rowquery.core.records import row_fields

    try:
        records = load_records(args.input)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Failed to load records: %s", e)
        return 2

    if not records:
        logging.warning("No records found in %s", args.input)
        return 1

    print(f"Records: {len(records)}")
    print("Fields:")
    for name in row_fields(records[0]):
        print(f"  - {name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rowquery",
        description=f"rowquery (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_query = sub.add_parser("query", help="Query a JSON, YAML, CSV or Parquet records file")
    p_query.add_argument("input", help="Path to the records file")
    p_query.add_argument("--plan", default=None, help="Path to a YAML query plan")
    p_query.add_argument(
        "--select",
        default=None,
        help="Comma-separated columns (e.g. id,email)",
    )
    p_query.add_argument(
        "--where",
        action="append",
        metavar="FIELD=VALUE",
        help="Condition (repeatable). Values are YAML scalars; dotted fields nest.",
    )
    p_query.add_argument(
        "--filter-where",
        action="append",
        metavar="FIELD=VALUE",
        help="Condition skipped when VALUE is null (repeatable)",
    )
    p_query.add_argument(
        "--order-by",
        default=None,
        help="Comma-separated columns, '-' prefix for descending (e.g. -created_at,id)",
    )
    p_query.add_argument("--skip", type=int, default=None, help="Number of results to skip")
    p_query.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    p_query.add_argument(
        "--result",
        type=str.lower,
        choices=RESULT_CHOICES,
        default=None,
        help="Result to extract (default: all, or the plan's result)",
    )
    p_query.add_argument(
        "--output",
        default=None,
        help="Write the JSON payload to this file instead of stdout",
    )
    p_query.set_defaults(func=cmd_query)

    p_fields = sub.add_parser("fields", help="Show the fields of a records file")
    p_fields.add_argument("input", help="Path to the records file")
    p_fields.set_defaults(func=cmd_fields)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
