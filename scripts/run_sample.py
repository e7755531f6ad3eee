#!/usr/bin/env python3
"""Run the solver on the sample graph, a problem file, or the scenario corpus.

Usage:
    python scripts/run_sample.py                    # sample graph → 11
    python scripts/run_sample.py problem.json       # JSON problem file
    python scripts/run_sample.py --scenarios        # acceptance report
    python scripts/run_sample.py --trace -v         # round table + debug log
"""
import sys, os, argparse, logging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from msa_solver import (
    DEFAULT_OPTIONS, SAMPLE_SCENARIO, load_graph, run_scenarios,
    solve_snapshot,
)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("problem", nargs="?",
                    help="JSON problem file (default: built-in sample)")
    ap.add_argument("--scenarios", action="store_true",
                    help="run the acceptance scenarios instead")
    ap.add_argument("--trace", action="store_true",
                    help="print the per-round table")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    if args.scenarios:
        report = run_scenarios()
        print(report.summary())
        return 0 if report.all_passed else 1

    if args.problem:
        graph, meta = load_graph(args.problem)
        label = meta.get("name", args.problem)
    else:
        graph, label = SAMPLE_SCENARIO.snapshot(), "Chu-Liu-Edmonds Sample"

    options = DEFAULT_OPTIONS.replace(record_trace=args.trace)
    result = solve_snapshot(graph, options=options)
    if result.found:
        print(f"{label} Result: {result.weight}")
    else:
        print(f"{label} Result: {result.failure}")
    if result.trace is not None:
        print(result.trace.explain())
    return 0 if result.found else 1


if __name__ == "__main__":
    sys.exit(main())
