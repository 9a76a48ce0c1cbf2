"""
FeedbackPulse - Feedback Analysis and Insights

CLI entry point for analyzing, storing and summarizing form responses.
"""

import argparse
import json
import logging
import sys

from feedbackpulse.models.response import FeedbackUpdate
from feedbackpulse.orchestrator import FeedbackPipeline
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FeedbackPulse - Feedback Analysis and Insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a piece of feedback without storing it
  python main.py analyze --text "Support was terrible, fix this immediately"

  # Store a submission (JSON object of field id -> answer)
  python main.py submit --form onboarding --answers answers.json

  # Summarize a form and export the insight table
  python main.py insights --form onboarding --export

  # Hide a response from dashboards
  python main.py update --id <response-id> --hide
        """
    )

    parser.add_argument(
        "--registry-path",
        default=str(settings.REGISTRY_PATH),
        help=f"Path to responses JSON (default: {settings.REGISTRY_PATH})"
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Report directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze a text and print the result")
    analyze.add_argument("--text", required=True, help="Feedback text to analyze")

    submit = subparsers.add_parser("submit", help="Analyze and store a form submission")
    submit.add_argument("--form", required=True, help="Form identifier")
    submit.add_argument("--answers", required=True, help="JSON file with field id -> answer")
    submit.add_argument(
        "--source",
        default=settings.DEFAULT_RESPONSE_SOURCE,
        help=f"Response source (default: {settings.DEFAULT_RESPONSE_SOURCE})"
    )

    insights = subparsers.add_parser("insights", help="Summarize the responses of a form")
    insights.add_argument("--form", required=True, help="Form identifier")
    insights.add_argument("--date", help="Snapshot date (YYYY-MM-DD). Defaults to today")
    insights.add_argument("--export", action="store_true", help="Write the CSV insight table")

    update = subparsers.add_parser("update", help="Update a stored response")
    update.add_argument("--id", required=True, help="Response ID")
    update.add_argument("--comment", help="Replacement comment (re-analyzed)")
    update.add_argument("--sentiment", choices=["positive", "neutral", "negative"])
    update.add_argument("--urgency", choices=["low", "medium", "high", "critical"])
    update.add_argument("--category", action="append", dest="categories", help="Category (repeatable)")
    update.add_argument("--rating", type=float, help="Overall rating")
    update.add_argument("--notes", help="Internal notes")
    visibility = update.add_mutually_exclusive_group()
    visibility.add_argument("--hide", action="store_false", dest="is_visible", default=None)
    visibility.add_argument("--show", action="store_true", dest="is_visible", default=None)
    update.add_argument("--expected-version", type=int, help="Reject the update if the version differs")

    delete = subparsers.add_parser("delete", help="Delete a stored response")
    delete.add_argument("--id", required=True, help="Response ID")

    return parser


def run_command(args: argparse.Namespace, pipeline: FeedbackPipeline) -> int:
    """Execute the selected sub-command. Returns the process exit code."""
    if args.command == "analyze":
        print(json.dumps(pipeline.analyze_text(args.text), indent=2))
        return 0

    if args.command == "submit":
        with open(args.answers, 'r') as f:
            answers = json.load(f)
        if not isinstance(answers, dict):
            raise ValueError("Answers file must contain a JSON object")

        response = pipeline.submit(args.form, answers, source=args.source)
        print(json.dumps(response.to_dict(), indent=2))
        return 0

    if args.command == "insights":
        snapshot, output_path = pipeline.generate_insights(args.form, date=args.date, export=args.export)
        print(json.dumps(snapshot.to_dict(), indent=2))
        if output_path:
            print(f"Insight table: {output_path}")
        return 0

    if args.command == "update":
        update = FeedbackUpdate(
            response_id=args.id,
            comment=args.comment,
            sentiment=args.sentiment,
            urgency=args.urgency,
            categories=args.categories,
            rating=args.rating,
            notes=args.notes,
            is_visible=args.is_visible
        )
        result = pipeline.update(update, expected_version=args.expected_version)
        if not result.success:
            print(f"❌ Update failed: {result.error}")
            for error in result.validation_errors:
                print(f"   - {error}")
            return 1
        print(f"✅ Response {args.id} updated to version {result.version}")
        return 0

    if args.command == "delete":
        pipeline.delete(args.id)
        print(f"✅ Response {args.id} deleted")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        pipeline = FeedbackPipeline(
            registry_path=args.registry_path,
            data_root=args.data_root,
            output_dir=args.output_dir
        )
        exit_code = run_command(args, pipeline)
        if exit_code == 0:
            logger.info(f"Command '{args.command}' completed successfully")
        return exit_code

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⚠️  Interrupted")
        return 1

    except Exception as e:
        logger.error(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"\n❌ Command failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        return 1


if __name__ == "__main__":
    sys.exit(main())
