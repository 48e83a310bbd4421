import argparse
import logging

from stockdash import data_handler, settings, utils
from stockdash.api import ApiClient
from stockdash.board import ReportBoard
from stockdash.logger import setup_logger
from stockdash.pipelines.registry import PIPELINE_REGISTRY
from stockdash.proxy import create_proxy_app

logger = logging.getLogger("stockdash")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inventory dashboard reports and API proxy.")
    commands = parser.add_subparsers(dest="command", required=True)

    report = commands.add_parser("report", help="Fetch a report and print it")
    report.add_argument("kind", choices=list(PIPELINE_REGISTRY), help=f"Report to fetch: {', '.join(settings.REPORT_TYPES)} or levels")
    report.add_argument("--export", action="store_true", help="Save the rows to the output folder")

    proxy = commands.add_parser("proxy", help="Serve /api/* and forward it to the backend")
    proxy.add_argument("--host", default="127.0.0.1")
    proxy.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def run_report(kind: str, export: bool = False) -> int:
    """Runs one report pipeline and prints its table and grand total."""
    config = settings.load_config()
    client = ApiClient(config)

    pipeline_cls = PIPELINE_REGISTRY[kind]
    result = ReportBoard(client, export=export).show(kind)

    if result is None:
        logger.error(f"❌ Failed to fetch {kind} report")
        return 1

    logger.info("\n--- Report ---")
    logger.info(data_handler.rows_to_frame(result.rows, pipeline_cls.row_type).to_string())
    if kind == "levels":
        logger.info(f"\nTotal quantity: {result.grand_total}")
    else:
        logger.info(f"\nTotal value: {utils.money(result.grand_total)}")
    return 0


def main(argv=None) -> int:
    setup_logger("stockdash")
    args = _parse_args(argv)

    if args.command == "proxy":
        config = settings.load_config()
        logger.info(f"Proxying /api/* to {config.backend_api_base}")
        create_proxy_app(config).run(host=args.host, port=args.port)
        return 0

    return run_report(args.kind, export=args.export)


if __name__ == "__main__":
    raise SystemExit(main())
