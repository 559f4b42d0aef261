"""Command-line interface for the Sudoku solver."""

import argparse
import logging
import sys
from typing import List, Optional

from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .core.board import SudokuGrid
from .exceptions import MalformedInputError
from .io.loader import find_puzzle_files, load_csv, write_csv
from .io.presenter import plot_constraint_heatmap, render_constraint_counts, render_grid
from .solvers import BacktrackingSolver

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_UNSOLVED = 2

WELCOME_MSG = (
    "\nConstraint Satisfaction Demonstration\n"
    "-------------------------------------------------------------\n"
    "Solves the given Sudoku puzzle via recursive backtracking with constraint propagation.\n"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudsolve",
        description="Sudoku solver using constraint propagation and backtracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle file (one row per line, 9 comma-separated digits, 0 = empty)
  sudsolve solve puzzles/easy.csv

  # Solve a puzzle given inline and show constraint counts
  sudsolve solve --puzzle "530070000600195000..." --constraints

  # Prompt for puzzle files until 'x' is entered
  sudsolve interactive

  # Time both branch orderings over a folder of puzzles
  sudsolve benchmark puzzles/ --output results/
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="count", default=0,
        help="Log more detail (-v for info, -vv for debug)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a Sudoku puzzle")
    solve_parser.add_argument(
        "file", nargs="?", default=None,
        help="Comma-delimited puzzle file"
    )
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, default=None,
        help="Puzzle string (81 chars, 0 or . for empty cells) instead of a file"
    )
    _add_display_options(solve_parser)
    solve_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Write the solved grid to this file"
    )
    solve_parser.add_argument(
        "--heatmap", type=str, default=None,
        help="Save a heatmap of the initial constraint counts to this PNG file"
    )

    # Interactive command
    interactive_parser = subparsers.add_parser(
        "interactive", help="Prompt for puzzle files until 'x' is entered"
    )
    _add_display_options(interactive_parser)

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Time the solver on puzzle files")
    bench_parser.add_argument(
        "paths", nargs="+",
        help="Puzzle files or directories of .csv/.txt puzzle files"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds per puzzle before a run counts as timed out (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def _add_display_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--heuristic", choices=BacktrackingSolver.HEURISTICS, default="mrv",
        help="Branch on the most constrained cell or the first empty one (default: mrv)"
    )
    subparser.add_argument(
        "--constraints", "-c", action="store_true",
        help="Also show the constraint count of each empty cell before solving"
    )
    subparser.add_argument(
        "--no-color", action="store_true",
        help="Do not highlight clues with terminal colors"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level={0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_FAILURE

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "interactive":
        return cmd_interactive(args)
    elif args.command == "benchmark":
        return cmd_benchmark(args)
    return EXIT_FAILURE


def solve_and_report(grid: SudokuGrid, args) -> bool:
    """Print the puzzle, solve it, then print the outcome and elapsed time."""
    color = False if args.no_color else None

    print("\nAttempting to find solution for puzzle:")
    print(render_grid(grid, color=color))
    if args.constraints:
        print("\nConstraint counts:")
        print(render_constraint_counts(grid, color=color))

    solver = BacktrackingSolver(heuristic=args.heuristic, track_memory=False)
    stats = solver.solve(grid)

    if stats.solved:
        print("\nDONE - Solution Found:")
        print(render_grid(grid, color=color))
    else:
        print("\nDONE - No solution exists for this puzzle.")

    print(f"\nElapsed Time: {stats.time_seconds:.4f}s")
    if args.verbose:
        print(f"  Nodes explored: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Forced assignments: {stats.extra['forced_assignments']:,}")
    return stats.solved


def cmd_solve(args) -> int:
    """Handle the solve command."""
    if (args.file is None) == (args.puzzle is None):
        print("Error: give either a puzzle file or --puzzle")
        return EXIT_FAILURE

    try:
        if args.puzzle is not None:
            grid = SudokuGrid.from_string(args.puzzle)
        else:
            grid = load_csv(args.file)
    except OSError as e:
        print(f"Error: File could not be opened: {e}")
        return EXIT_FAILURE
    except MalformedInputError as e:
        print(f"Error parsing puzzle: {e}")
        return EXIT_FAILURE

    log.info("Loaded puzzle with %d clues", grid.count_filled())

    if args.heatmap:
        plot_constraint_heatmap(grid, args.heatmap)
        print(f"Constraint heatmap saved to {args.heatmap}")

    solved = solve_and_report(grid, args)

    if solved and args.output:
        write_csv(grid, args.output)
        print(f"Solution saved to {args.output}")

    return EXIT_SUCCESS if solved else EXIT_UNSOLVED


def cmd_interactive(args) -> int:
    """Handle the interactive command: prompt for files until 'x'."""
    while True:
        print(WELCOME_MSG)
        try:
            filename = input("Enter a Sudoku file ('x' to exit): ").strip()
        except EOFError:
            return EXIT_SUCCESS

        if filename == "x":
            return EXIT_SUCCESS
        if not filename:
            continue

        try:
            grid = load_csv(filename)
        except OSError:
            print("Error: File could not be opened.")
            continue
        except MalformedInputError as e:
            print(f"Error parsing puzzle: {e}")
            continue

        solve_and_report(grid, args)


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    files = []
    for path in args.paths:
        files.extend(find_puzzle_files(path))
    log.info("Found %d puzzle files", len(files))
    if not files:
        print("Error: no puzzle files found")
        return EXIT_FAILURE

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(files)}")

    benchmark = Benchmark(files, timeout_seconds=args.timeout)

    print(f"Orderings: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['total_solved']}/{stats['total_tested']}")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Nodes: {stats['avg_nodes_explored']:.1f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
