# main.py

"""Entry point for the grocery_prices report."""

import argparse
import logging
import sys

from grocery_prices.analysis.transforms import TRANSFORMS
from grocery_prices.config.logging_config import setup_logging
from grocery_prices.config.settings import Settings

logger = logging.getLogger("grocery_prices.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="grocery_prices",
        description="Descriptive statistics and charts for Canadian grocery prices.",
        epilog=f"Known vendors: {', '.join(Settings.KNOWN_VENDORS)}",
    )
    parser.add_argument(
        "data_path",
        nargs="?",
        default=None,
        help=f"Cleaned price CSV (default: {Settings.DATA_PATH}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="table",
        dest="output_format",
        help="Summary output format (default: table).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory for charts (default: output/).",
    )
    parser.add_argument(
        "-t",
        "--transform",
        choices=sorted(TRANSFORMS),
        default=Settings.DEFAULT_TRANSFORM,
        dest="transform_name",
        help=f"Transform for the second summary table (default: {Settings.DEFAULT_TRANSFORM}).",
    )
    parser.add_argument(
        "--no-charts",
        action="store_false",
        default=True,
        dest="charts",
        help="Skip writing the HTML charts.",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        default=False,
        dest="open_browser",
        help="Open each chart in the browser once written.",
    )
    return parser


def main() -> None:
    """Parse arguments and run the report."""
    args = _build_parser().parse_args()

    log_file = setup_logging(args.data_path or Settings.DATA_PATH)
    logger.info("grocery_prices starting, log file: %s", log_file)

    from grocery_prices.cli.runner import run_report

    try:
        exit_code = run_report(
            data_path=args.data_path,
            output_format=args.output_format,
            output_dir=args.output_dir,
            charts=args.charts,
            open_browser=args.open_browser,
            transform_name=args.transform_name,
        )
    except Exception:
        logger.critical("Fatal error during report run", exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
