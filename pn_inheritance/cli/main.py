"""
Command-line interface for pn-inheritance.

Provides commands for classifying a child net against a parent net and for
exploring the reachability graph of a single net.

:return : CLI commands.
:return: Main entry point for command-line usage.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from pn_inheritance.analysis.reachability import DEFAULT_STATE_BOUND, explore
from pn_inheritance.config import PROJECTION_SEMANTICS, AnalysisConfig
from pn_inheritance.documents.io import read_net
from pn_inheritance.errors import DocumentError
from pn_inheritance.inheritance.classifier import analyze

EXIT_ANALYSIS_FAILED = 2


def cmd_classify(args: argparse.Namespace) -> int:
    """
    Classify a child net against a parent net.

    :param args: Command-line arguments.
    :return : Exit code.
    :return: 0 on a verdict, 2 if the analysis could not complete.
    """
    parent_net = read_net(args.parent)
    child_net = read_net(args.child)
    print(f"Parent: {args.parent} ({len(parent_net.places)} places, {len(parent_net.transitions)} transitions)")
    print(f"Child:  {args.child} ({len(child_net.places)} places, {len(child_net.transitions)} transitions)")

    config = AnalysisConfig(
        state_bound=args.state_bound,
        strict_protocol=not args.lenient_protocol,
        projection_semantics=args.semantics,
        validate_models=args.validate,
    )
    report = analyze(parent_net, child_net, config)

    if args.out_json:
        out_path = Path(args.out_json)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w") as f:
            json.dump({"config": config.to_dict(), "report": report.to_dict()}, f, indent=2)
        print(f"Report exported to: {args.out_json}")

    if not report.ok:
        print(f"Analysis failed: {report.error}", file=sys.stderr)
        return EXIT_ANALYSIS_FAILED

    print(f"\nResult: {report.result}")
    print(f"  Markings: parent={report.parent_states}, child={report.child_states}")
    return 0


def cmd_explore(args: argparse.Namespace) -> int:
    """
    Print the reachability graph of a net.

    :param args: Command-line arguments.
    :return : Exit code.
    :return: 0 on success, 2 on state-space overflow.
    """
    net = read_net(args.net)
    exploration = explore(net, state_bound=args.state_bound)
    if not exploration.ok:
        print(f"Analysis failed: {exploration.overflow}", file=sys.stderr)
        return EXIT_ANALYSIS_FAILED

    graph = exploration.unwrap()
    frame = graph.to_frame()
    print(f"Reachability graph: {len(graph)} markings, {graph.edge_count()} edges")
    print(f"Initial marking: {graph.initial}")
    if args.max_rows:
        print(frame.head(args.max_rows).to_string(index=False))

    if args.out_csv:
        out_path = Path(args.out_csv)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(out_path, index=False)
        print(f"Edges exported to: {args.out_csv}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pn-inheritance",
        description="Protocol and projection inheritance between place/transition nets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Increase log verbosity")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    classify_parser = subparsers.add_parser("classify", help="Classify child net against parent net")
    classify_parser.add_argument("--parent", required=True, help="Parent net file (XML/JSON/PNML)")
    classify_parser.add_argument("--child", required=True, help="Child net file (XML/JSON/PNML)")
    classify_parser.add_argument(
        "--state-bound",
        type=int,
        default=DEFAULT_STATE_BOUND,
        help=f"Maximum markings per net (default: {DEFAULT_STATE_BOUND})",
    )
    classify_parser.add_argument(
        "--lenient-protocol",
        action="store_true",
        help="Ignore child tokens on places unknown to the parent",
    )
    classify_parser.add_argument(
        "--semantics",
        choices=PROJECTION_SEMANTICS,
        default="bisimulation",
        help="Projection check semantics (default: bisimulation)",
    )
    classify_parser.add_argument("--validate", action="store_true", help="Reject malformed nets")
    classify_parser.add_argument("--out-json", help="Output JSON file for the report")

    explore_parser = subparsers.add_parser("explore", help="Build the reachability graph of a net")
    explore_parser.add_argument("--net", required=True, help="Net file (XML/JSON/PNML)")
    explore_parser.add_argument(
        "--state-bound",
        type=int,
        default=DEFAULT_STATE_BOUND,
        help=f"Maximum markings (default: {DEFAULT_STATE_BOUND})",
    )
    explore_parser.add_argument("--max-rows", type=int, default=50, help="Edges to print (0 for none)")
    explore_parser.add_argument("--out-csv", help="Output CSV file for the edge table")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for CLI.

    :param argv: Arguments, defaults to sys.argv.
    :return : None.
    :return: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "classify":
            code = cmd_classify(args)
        else:
            code = cmd_explore(args)
    except (DocumentError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(code)


if __name__ == "__main__":
    main()
