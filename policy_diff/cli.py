#!/usr/bin/env python3
"""
policy_diff CLI

Command-line interface for policy version and plan comparison.

Usage:
    python -m policy_diff.cli normalize <document_path>...
    python -m policy_diff.cli diff <old_version> <new_version>
    python -m policy_diff.cli compare <plan_a> <plan_b> --labels <a> <b>
    python -m policy_diff.cli eligibility --policy-start <date> --treatment-date <date> --type <t>
    python -m policy_diff.cli demo
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .comparison import ComparisonPresenter
from .eligibility import WaitingPeriodChecker
from .errors import PolicyDiffError
from .ingestion import FieldNormalizer, PolicyLoader
from .ingestion.field_schema import DEFAULT_FIELD_SCHEMA
from .reports import ReportGenerator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="policy_diff",
        description="policy_diff - Compare insurance policy versions and plans",
        epilog=(
            "Highlights wording changes for human review. "
            "Refer to the issued policy document for binding terms."
        )
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Normalize command
    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Extract comparison fields from policy documents"
    )
    normalize_parser.add_argument(
        "documents",
        nargs="+",
        type=str,
        help="Paths to JSON policy documents or directories of them"
    )
    _add_output_arguments(normalize_parser)

    # Diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare two versions of a policy clause by clause"
    )
    diff_parser.add_argument(
        "old_version",
        type=str,
        help="Path to the earlier version (clause list or document)"
    )
    diff_parser.add_argument(
        "new_version",
        type=str,
        help="Path to the later version (clause list or document)"
    )
    _add_output_arguments(diff_parser)

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare two plans side by side"
    )
    compare_parser.add_argument(
        "plan_a",
        type=str,
        help="Path to first plan document"
    )
    compare_parser.add_argument(
        "plan_b",
        type=str,
        help="Path to second plan document"
    )
    compare_parser.add_argument(
        "--labels", "-l",
        nargs=2,
        default=None,
        help="Display labels for each plan (default: file names)"
    )
    _add_output_arguments(compare_parser)

    # Eligibility command
    eligibility_parser = subparsers.add_parser(
        "eligibility",
        help="Check a claim against its waiting period"
    )
    eligibility_parser.add_argument(
        "--policy-start",
        required=True,
        help="Policy start date (YYYY-MM-DD)"
    )
    eligibility_parser.add_argument(
        "--treatment-date",
        required=True,
        help="Hospitalization or treatment date (YYYY-MM-DD)"
    )
    eligibility_parser.add_argument(
        "--type", "-t",
        dest="treatment_type",
        default="general",
        help=f"Treatment type ({', '.join(DEFAULT_FIELD_SCHEMA.waiting_periods)})"
    )
    eligibility_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Demo command for testing
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run a demo comparison with synthetic policies"
    )
    demo_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path"
    )

    return parser


def _add_output_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file path (default: stdout)"
    )
    subparser.add_argument(
        "--format", "-f",
        choices=["json", "markdown", "text"],
        default="text",
        help="Output format"
    )


def write_output(output: str, path) -> None:
    if path:
        Path(path).write_text(output, encoding='utf-8')
        print(f"Results written to: {path}")
    else:
        print(output)


def normalize_documents(args) -> int:
    """Normalize one or more policy documents."""
    loader = PolicyLoader()
    normalizer = FieldNormalizer()

    documents = {}
    for doc_path in args.documents:
        try:
            if os.path.isdir(doc_path):
                documents.update(loader.load_directory(doc_path))
            else:
                documents[Path(doc_path).stem] = loader.load(doc_path)
        except FileNotFoundError:
            print(f"Error: File not found: {doc_path}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    records = {name: normalizer.normalize(doc) for name, doc in documents.items()}

    if args.format == "markdown":
        generator = ReportGenerator()
        output = "# Normalized Policies\n\n" + "\n".join(
            generator.generate_record_report(name, record)
            for name, record in records.items()
        )
    else:
        results = {
            name: record.to_dict() if record is not None else None
            for name, record in records.items()
        }
        output = format_output(results, args.format)

    write_output(output, args.output)

    not_ready = [name for name, record in records.items() if record is None]
    if not_ready:
        print(f"Not comparison-ready: {', '.join(not_ready)}", file=sys.stderr)
    return 0


def diff_versions(args) -> int:
    """Compare two versions of a policy."""
    print(f"Comparing versions:")
    print(f"  old: {args.old_version}")
    print(f"  new: {args.new_version}")
    print("-" * 50)

    loader = PolicyLoader()
    try:
        old_clauses = loader.load_clauses(args.old_version)
        new_clauses = loader.load_clauses(args.new_version)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    presenter = ComparisonPresenter()
    comparison = presenter.present_versions(
        old_clauses,
        new_clauses,
        old_label=Path(args.old_version).stem,
        new_label=Path(args.new_version).stem
    )

    if args.format == "markdown":
        output = ReportGenerator().generate_version_report(comparison)
    else:
        output = format_output(comparison.to_dict(), args.format)

    write_output(output, args.output)
    return 0


def compare_plans(args) -> int:
    """Compare two plans side by side."""
    labels = args.labels or [Path(args.plan_a).stem, Path(args.plan_b).stem]

    loader = PolicyLoader()
    try:
        plan_a = loader.load(args.plan_a)
        plan_b = loader.load(args.plan_b)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    presenter = ComparisonPresenter()
    comparison = presenter.compare_plans(plan_a, plan_b, labels[0], labels[1])

    if args.format == "markdown":
        output = ReportGenerator().generate_plan_report(comparison)
    else:
        output = format_output(comparison.to_dict(), args.format)

    write_output(output, args.output)
    return 0 if comparison.available else 2


def check_eligibility(args) -> int:
    """Check waiting-period eligibility for a claim."""
    checker = WaitingPeriodChecker()
    try:
        result = checker.check(args.policy_start, args.treatment_date, args.treatment_type)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_output(result.to_dict(), args.format))
    return 0


def run_demo(args) -> int:
    """Run a demo with synthetic policy data."""
    print("Running policy_diff Demo")
    print("=" * 50)

    policy_v1 = {
        "policy": {
            "policy_name": "Family Health Optima",
            "insurer": "Star Health",
            "sum_insured": 500000,
            "premium_amount": 18500,
            "policy_type": "Family Floater",
            "network_hospitals": [{"name": "City Care"}, {"name": "Apollo"}],
            "sections": [
                {"title": "4.1 Initial Waiting Period",
                 "content": "90 days from the first policy commencement date."},
                {"title": "4.2 Hospitalization Coverage",
                 "content": "In-patient expenses are covered up to the sum insured.",
                 "sub_sections": [
                     {"title": "4.2.1 Room Rent",
                      "content": "Room rent is capped at 1% of sum insured per day."}
                 ]},
                {"title": "6.1 Maternity Benefit",
                 "content": "Covered after 24 months up to 50000 for normal delivery."},
            ]
        }
    }

    policy_v2 = {
        "policy": {
            "policy_name": "Family Health Optima",
            "insurer": "Star Health",
            "sum_insured": 700000,
            "premium_amount": 21000,
            "policy_type": "Family Floater",
            "network_hospitals": [{"name": "City Care"}, {"name": "Apollo"}, {"name": "Fortis"}],
            "sections": [
                {"title": "4.1 Initial Waiting Period",
                 "content": "30 days from the first policy commencement date."},
                {"title": "4.2 Hospitalization Coverage",
                 "content": "In-patient expenses are covered up to the sum insured.",
                 "sub_sections": [
                     {"title": "4.2.1 Room Rent",
                      "content": "Room rent is capped at 2% of sum insured per day."}
                 ]},
                {"title": "6.5 Mental Health Cover",
                 "content": "In-patient psychiatric treatment is covered up to sum insured."},
            ]
        }
    }

    presenter = ComparisonPresenter()
    generator = ReportGenerator()

    print("\nComparing versions...")
    versions = presenter.present_documents(policy_v1, policy_v2, "v1", "v2")
    print(generator.generate_version_report(versions, title="Demo: Version Comparison"))

    print("\nComparing plans...")
    plans = presenter.compare_plans(policy_v1, policy_v2, "2024 Plan", "2025 Plan")
    print(generator.generate_plan_report(plans))

    print("\nChecking a maternity claim...")
    eligibility = WaitingPeriodChecker().check("2024-01-01", "2024-09-01", "maternity")
    print(f"  {eligibility.message}")

    if args.output:
        results = {
            "demo": True,
            "versions": versions.to_dict(),
            "plans": plans.to_dict(),
            "eligibility": eligibility.to_dict()
        }
        Path(args.output).write_text(json.dumps(results, indent=2, default=str), encoding='utf-8')
        print(f"\nDemo results saved to: {args.output}")

    return 0


def format_output(data, format_type: str) -> str:
    """Render a result dictionary as JSON or as indented plain text."""
    if format_type == "json":
        return json.dumps(data, indent=2, default=str)
    return "\n".join(_text_lines(data))


def _text_lines(data: dict, depth: int = 0) -> list[str]:
    prefix = "  " * depth
    lines = []
    for key, value in data.items():
        label = key.replace('_', ' ')
        if isinstance(value, dict):
            lines.append(f"{prefix}{label.upper()}:")
            lines.extend(_text_lines(value, depth + 1))
        elif isinstance(value, list):
            lines.append(f"{prefix}{label.upper()}:")
            for item in value:
                if isinstance(item, dict):
                    lines.extend(f"{prefix}  - {k}: {v}" for k, v in item.items())
                else:
                    lines.append(f"{prefix}  - {item}")
        else:
            lines.append(f"{prefix}{label}: {value}")
    return lines


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "normalize":
            return normalize_documents(args)
        elif args.command == "diff":
            return diff_versions(args)
        elif args.command == "compare":
            return compare_plans(args)
        elif args.command == "eligibility":
            return check_eligibility(args)
        elif args.command == "demo":
            return run_demo(args)
    except PolicyDiffError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
