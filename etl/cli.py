import argparse
import sys

from common.logging_setup import setup_logging
from common.settings import load_settings
from etl.pipeline import run_export


class _UsageParser(argparse.ArgumentParser):
    # wrong invocation is a usage error with exit code 1
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _UsageParser(
        prog="wallet-tx-export",
        description="Export a wallet's transaction history from Etherscan to CSV",
        epilog="The API key is read from $ETHERSCAN_API_KEY.",
    )
    p.add_argument("address", help="Ethereum wallet address")
    p.add_argument("--output", default=None,
                   help="CSV path (default: <address>_transactions.csv)")
    p.add_argument("--config", default="config.yaml",
                   help="Optional YAML settings file")
    p.add_argument("--log-level", dest="log_level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Diagnostics level on stderr")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = load_settings(args.config)
        summary = run_export(args.address, settings=settings, output_path=args.output)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if summary.written:
        print(f"Exported {summary.total} transactions to {summary.path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
