"""
Stock watchlist CLI.

Usage:
    stocks init --mode file                    # Store the watchlist in config/stocks.txt
    stocks init --mode database                # Store the watchlist in SQLite
    stocks add AAPL                            # Fetch and store a new stock
    stocks list                                # Stored symbols
    stocks search AAPL                         # Stored fundamentals
    stocks update AAPL / stocks update-all     # Re-fetch
    stocks drop AAPL
    stocks history AAPL 2.weeks.ago            # Change since a past date
    stocks history AAPL 05.03.2024
    stocks info pe_ratio                       # Explain a term
    stocks show-db / set-db PATH / mode
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from config import ConfigError, StoreSettings, load_settings, open_store, save_settings, settings, settings_path
from fundamentals import print_term
from history import run_history
from sources.yahoo.fetcher import FetchError
from storage.base import StoreError
from utils import log
from utils.dates import USAGE, DateExpressionError
from watchlist import Watchlist

logger = log.setup_verbose_logging("stocks")

# Commands that work without an initialised configuration
NO_CONFIG_COMMANDS = {"init", "info", "show-db", "set-db"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stocks", description="Track a watchlist of stocks and their fundamentals")
    parser.add_argument("--config-dir", type=Path, default=None,
                        help=f"Directory holding settings.json and stocks.txt (default: {settings.CONFIG_DIR})")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Choose where the watchlist is stored")
    init.add_argument("--mode", choices=["file", "database"], required=True)
    init.add_argument("--database-path", type=str, default=settings.DEFAULT_DB_PATH,
                      help="SQLite file used in database mode")

    for name, help_text in [
        ("add", "Fetch a stock and add it to the watchlist"),
        ("search", "Show the stored fundamentals of a stock"),
        ("drop", "Remove a stock from the watchlist"),
        ("update", "Re-fetch one stock"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("symbol")

    sub.add_parser("list", help="List stored symbols")
    sub.add_parser("update-all", help="Re-fetch every stored stock")

    history = sub.add_parser("history", help="Price change since a past date")
    history.add_argument("symbol")
    history.add_argument("date", help="DD.MM.YYYY or NUMBER.days/weeks/months/years.ago")

    info = sub.add_parser("info", help="Explain a fundamental-analysis term")
    info.add_argument("term", nargs="?", default=None)

    sub.add_parser("show-db", help="Show the configured SQLite path")
    set_db = sub.add_parser("set-db", help="Set the SQLite path used in database mode")
    set_db.add_argument("path")
    sub.add_parser("mode", help="Show the configured storage mode")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger.debug(f"Command: {args.command} {vars(args)}")

    try:
        if args.command in NO_CONFIG_COMMANDS:
            return _run_setup_command(args)
        return _run_watchlist_command(args, load_settings(args.config_dir))

    except DateExpressionError as e:
        log.err(str(e))
        if USAGE not in str(e):
            log.info(USAGE)
        return 1

    except ConfigError as e:
        log.err(str(e))
        log.info("Run: stocks init --mode file|database")
        return 1

    except FetchError as e:
        log.err(f"Could not reach Yahoo Finance: {e}")
        logger.error(f"{args.command}: {e}")
        return 1

    except StoreError as e:
        log.err(str(e))
        logger.error(f"{args.command}: {e}")
        return 1


def _run_setup_command(args) -> int:
    if args.command == "info":
        return 0 if print_term(args.term) else 1

    if args.command == "init":
        store_settings = StoreSettings(mode=args.mode, database_path=args.database_path)
        path = save_settings(store_settings, args.config_dir)
        open_store(store_settings, args.config_dir).close()
        log.ok(f"Mode set to '{args.mode}' ({path})")
        return 0

    current = _settings_or_default(args.config_dir)

    if args.command == "show-db":
        print(current.database_path)
        return 0

    # set-db
    updated = current.model_copy(update={"database_path": args.path})
    save_settings(updated, args.config_dir)
    log.ok(f"Database path set to {args.path}")
    return 0


def _run_watchlist_command(args, store_settings: StoreSettings) -> int:
    if args.command == "mode":
        print(store_settings.mode)
        return 0

    store = open_store(store_settings, args.config_dir)
    try:
        watchlist = Watchlist(store)

        if args.command == "add":
            watchlist.add(args.symbol)
        elif args.command == "list":
            for symbol in watchlist.list_symbols():
                print(symbol)
        elif args.command == "search":
            snapshot = watchlist.search(args.symbol)
            if snapshot is not None:
                log.summary_table(snapshot.symbol.upper(), snapshot.display_rows())
        elif args.command == "drop":
            watchlist.drop(args.symbol)
        elif args.command == "update":
            watchlist.update(args.symbol)
        elif args.command == "update-all":
            watchlist.update_all()
        elif args.command == "history":
            result = run_history(args.symbol, args.date, store, fetcher=watchlist.fetcher)
            if result is not None:
                for line in result.lines():
                    print(line)
        return 0
    finally:
        store.close()


def _settings_or_default(config_dir: Optional[Path]) -> StoreSettings:
    if settings_path(config_dir).exists():
        return load_settings(config_dir)
    return StoreSettings(mode="database")


if __name__ == "__main__":
    sys.exit(main())
