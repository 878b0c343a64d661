"""Command-line interface for tolerance stack-up and hole-fit analysis."""

from __future__ import annotations

import argparse
import json
import sys

from tolstack.holefit import HoleFitSetup
from tolstack.models import ToleranceStack, Unit
from tolstack.scenarios import HOLE_SCENARIOS, STACK_EXAMPLES, create_hole_setup, create_stack
from tolstack.stackup import compute_stackup, monte_carlo_stackup
from tolstack.statistics import percent_contribution


def _load_json(path: str) -> dict:
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_stack(args: argparse.Namespace) -> None:
    """Run the linear stack-up on a JSON stack file."""
    data = _load_json(args.file)
    try:
        stack = ToleranceStack.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        print(f"Invalid stack file {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    result = compute_stackup(stack.dimensions)
    print(f"Stack: {stack.name}")
    print(result.summary())
    print()

    contributions = percent_contribution(stack.dimensions)
    if contributions:
        print("  Percent contribution (RSS):")
        for name, pct in contributions:
            print(f"    {name:30s}  {pct:6.2f}%")
        print()

    if args.mc_samples:
        mc = monte_carlo_stackup(stack.dimensions, n_samples=args.mc_samples, seed=args.seed)
        print(mc.summary())
        print()

    if args.export:
        from tolstack.export import save_spreadsheet
        path = save_spreadsheet(stack.dimensions, args.export)
        print(f"Exported spreadsheet to {path}")

    if args.plot or args.save_plots:
        from tolstack.visualize import plot_gap_distribution, plot_stack_chain
        base = args.save_plots
        plot_stack_chain(stack.dimensions, title=stack.name,
                         save_path=base.replace(".png", "_loop.png") if base else None)
        plot_gap_distribution(result,
                              save_path=base.replace(".png", "_rss.png") if base else None)

    if args.narrate:
        from tolstack.narrative import narrate_stackup
        print("--- Engineering Review ---")
        print(narrate_stackup(stack.dimensions, result))


def cmd_holefit(args: argparse.Namespace) -> None:
    """Run the hole-pattern fit analysis on a JSON setup file."""
    data = _load_json(args.file)
    try:
        setup = HoleFitSetup.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        print(f"Invalid hole-fit file {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.unit:
        setup = setup.convert(Unit(args.unit.upper()))

    analysis = setup.analyze()
    if setup.name:
        print(f"Setup: {setup.name}")
    print(f"Mode: {setup.mode.value}   Unit: {setup.unit.value}")
    print(analysis.summary())

    if args.plot or args.save_plots:
        from tolstack.visualize import plot_misalignment
        plot_misalignment(analysis, setup.deviation, save_path=args.save_plots)


def cmd_create_example(args: argparse.Namespace) -> None:
    """Write a built-in example to a JSON file."""
    if args.example in STACK_EXAMPLES:
        data = create_stack(args.example).to_dict()
    elif args.example in HOLE_SCENARIOS:
        data = create_hole_setup(args.example).to_dict()
    else:
        print(f"Unknown example: {args.example}")
        sys.exit(1)

    path = args.output or f"{args.example}_example.json"
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    print(f"Created example: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tolstack",
        description="Tolerance stack-up and hole-pattern fit analysis",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- stack ---
    p_stack = subparsers.add_parser("stack", help="Analyze a linear stack from a JSON file")
    p_stack.add_argument("file", help="Path to stack JSON file")
    p_stack.add_argument("--mc-samples", type=int, default=0,
                         help="Also run a Monte Carlo check with this many samples")
    p_stack.add_argument("--seed", type=int, default=None,
                         help="Random seed for Monte Carlo")
    p_stack.add_argument("--export", default=None,
                         help="Write an Excel XML workbook to this path")
    p_stack.add_argument("--plot", action="store_true",
                         help="Show loop diagram and distribution plots")
    p_stack.add_argument("--save-plots", default=None,
                         help="Save plots to file (base path, e.g. output.png)")
    p_stack.add_argument("--narrate", action="store_true",
                         help="Ask the language model for a written review")
    p_stack.set_defaults(func=cmd_stack)

    # --- holefit ---
    p_hole = subparsers.add_parser("holefit", help="Analyze a hole pattern from a JSON file")
    p_hole.add_argument("file", help="Path to hole-fit JSON file")
    p_hole.add_argument("--unit", choices=["mm", "inch"], default=None,
                        help="Convert inputs to this unit before analysis")
    p_hole.add_argument("--plot", action="store_true",
                        help="Show the misalignment view")
    p_hole.add_argument("--save-plots", default=None,
                        help="Save the misalignment view to this file")
    p_hole.set_defaults(func=cmd_holefit)

    # --- example ---
    p_example = subparsers.add_parser("example", help="Create an example input file")
    p_example.add_argument("example", choices=list(STACK_EXAMPLES) + list(HOLE_SCENARIOS),
                           help="Which example to create")
    p_example.add_argument("-o", "--output", default=None,
                           help="Output file path")
    p_example.set_defaults(func=cmd_create_example)

    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
