"""CLI helpers for checking one mapping file."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from mapping_control.core import MappingValidationError, load_config_mapping

from .config import ValidationSpec, load_validation_spec
from .registry import build_default_registry


def run_check_cli(argv: Sequence[str] | None = None) -> int:
    """Validate a JSON/YAML mapping against a config or a named recipe.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        CLI argument list. When ``None``, process arguments are used.

    Returns
    -------
    int
        Exit code (`0` when the mapping conforms, `1` on a violation).
    """

    parser = argparse.ArgumentParser(description="Check a mapping file against declared key rules.")
    parser.add_argument("--input", required=True, help="Path to the JSON or YAML mapping to check.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--schema", help="Path to a validation JSON or YAML config.")
    source.add_argument(
        "--recipe",
        choices=tuple(item.recipe_id for item in build_default_registry().list()),
        help="Built-in recipe ID.",
    )
    parser.add_argument(
        "--term",
        default=None,
        help="Noun used in messages (overrides the config).",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    spec = _resolve_spec(schema=args.schema, recipe=args.recipe)
    options = {"term": args.term} if args.term else {}
    data = load_config_mapping(args.input)

    try:
        spec.validate(data, **options)
    except MappingValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(f"OK: {args.input} conforms to {args.schema or args.recipe}")
    return 0


def _resolve_spec(*, schema: str | None, recipe: str | None) -> ValidationSpec:
    """Build the spec selected on the command line."""

    if schema is not None:
        return load_validation_spec(schema)
    return ValidationSpec(chain=build_default_registry().chain(str(recipe)))


def main() -> None:
    """Execute check CLI and exit with returned code."""

    raise SystemExit(run_check_cli())


if __name__ == "__main__":
    main()


__all__ = ["main", "run_check_cli"]
