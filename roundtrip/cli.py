"""
Command line interface for RoundTrip.

Usage:
    roundtrip                      # interactive: prompt for N and M until 0
    roundtrip N M [options]        # search a single grid
    roundtrip --batch [--resume]   # search every grid in the config
    roundtrip --status             # show the results store
"""

import argparse
import sys
from typing import Callable, Iterator, List, Optional, Tuple

import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from roundtrip import __version__
from roundtrip.pipeline.config import AppConfig, load_config
from roundtrip.pipeline.runner import RoundTripRunner

InputFn = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roundtrip",
        description="Count closed tours (Hamiltonian cycles) on an n x m grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  roundtrip                     # Prompt for grid sizes, 0 to end
  roundtrip 4 6                 # Search the 4 x 6 grid
  roundtrip 4 4 --show 3        # ... and print the first 3 tours
  roundtrip --batch --resume    # Run the configured grids, skipping finished ones
        """,
    )

    parser.add_argument(
        "dims",
        nargs="*",
        type=int,
        metavar="N M",
        help="Grid columns and rows (omit for the interactive prompt)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: config/roundtrip.yaml if present)",
    )

    parser.add_argument(
        "--batch",
        action="store_true",
        help="Search every grid listed in the config",
    )

    parser.add_argument(
        "--resume",
        action="store_true",
        help="With --batch, skip grids already completed in the results file",
    )

    parser.add_argument(
        "--status",
        action="store_true",
        help="Show recorded runs and exit without searching",
    )

    parser.add_argument(
        "--show",
        type=int,
        default=None,
        metavar="K",
        help="Print the first K tours as ASCII",
    )

    parser.add_argument(
        "--render",
        type=int,
        default=None,
        metavar="K",
        help="Save the first K tours as PNG images",
    )

    parser.add_argument(
        "--gallery",
        type=int,
        default=None,
        metavar="K",
        help="Save the first K tours side by side in one PNG",
    )

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        metavar="DIR",
        help="Output directory for results and renders",
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the results file",
    )

    parser.add_argument(
        "--verify-closure",
        action="store_true",
        help="Check that every complete path closes back to the start vertex",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the grid topology before searching",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command line options on top of the loaded config."""
    if args.show is not None:
        config.output.show_limit = max(0, args.show)
    if args.render is not None:
        config.output.render_limit = max(0, args.render)
    if args.gallery is not None:
        config.output.gallery_limit = max(0, args.gallery)
    if args.output is not None:
        config.output.output_dir = args.output
    if args.no_save:
        config.output.save_results = False
    if args.verify_closure:
        config.search.verify_closure = True
    return config


# ---------- Interactive prompt ----------

def read_int(label: str, input_fn: InputFn, console: Console) -> int:
    """Prompt until the answer parses as an integer."""
    while True:
        raw = input_fn(f"{label}: ")
        try:
            return int(raw.strip())
        except ValueError:
            console.print(f"Could not assign a value to {label.lower()}: {raw!r}", markup=False)
            console.print("Please try again")


def prompt_dimensions(input_fn: InputFn, console: Console) -> Iterator[Tuple[int, int]]:
    """Yield (n, m) pairs from the prompt until 0 is entered."""
    while True:
        console.print("Enter matrix size n x m (or 0 to end)")
        n = read_int("N", input_fn, console)
        if n == 0:
            return
        m = read_int("M", input_fn, console)
        if m == 0:
            return
        yield n, m


def interactive(runner: RoundTripRunner, input_fn: InputFn) -> int:
    console = runner.console
    console.print(Panel.fit("[bold cyan]RoundTrip[/bold cyan]\nClosed tours on rectangular grids"))
    try:
        for n, m in prompt_dimensions(input_fn, console):
            runner.run_grid(n, m)
            console.print()
    except EOFError:
        console.print()
    return 0


# ---------- Entry point ----------

def main(
    argv: Optional[List[str]] = None,
    input_fn: InputFn = input,
    console: Optional[Console] = None,
) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments (default: sys.argv[1:])
        input_fn: Prompt function for the interactive loop
        console: Console to report on

    Returns:
        Exit status (0 success, 1 failure, 130 interrupted)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.dims) not in (0, 2):
        parser.error("expected both N and M, or neither")

    console = console or Console()

    try:
        config = apply_overrides(load_config(args.config), args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error: could not load config: {escape(str(e))}[/red]")
        return 1

    try:
        runner = RoundTripRunner(config, console=console, verbose=args.verbose)

        if args.status:
            runner.print_status()
            return 0

        if args.batch:
            runs = runner.run_batch(resume=args.resume)
            return 1 if any(not r.success for r in runs) else 0

        if args.dims:
            n, m = args.dims
            run, _ = runner.run_grid(n, m)
            return 0 if run.success else 1

        return interactive(runner, input_fn)

    except KeyboardInterrupt:
        console.print("\nInterrupted by user")
        return 130
    except Exception as e:
        console.print(f"\n[red]Error: {escape(str(e))}[/red]")
        console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
