"""
Color-coded console output for the stocks CLI.

User-facing status lines (notices, diagnostics, progress) go through the
helpers below; debug traces go through the stdlib logger returned by
setup_verbose_logging(). Uses colorama for cross-platform terminal colors.
"""

import datetime
import logging
import os
import sys

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for CLI output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    STEP = Fore.BLUE + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    DIM = Style.DIM
    TICKER = Fore.MAGENTA + Style.BRIGHT
    VALUE = Fore.GREEN
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Console helpers
# ---------------------------------------------------------------------------

def step(msg: str) -> None:
    print(f"{C.STEP}[{_ts()}] >> {msg}{C.RESET}")


def info(msg: str) -> None:
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


def progress(current: int, total: int, ticker: str, msg: str) -> None:
    """Print a progress line like [3/21] AAPL: ..."""
    print(
        f"{C.DIM}[{_ts()}]{C.RESET} "
        f"{C.STEP}[{current}/{total}]{C.RESET} "
        f"{C.TICKER}{ticker.upper()}{C.RESET}: {msg}"
    )


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """Print label-value pairs as a bulleted list under a title."""
    print(f"{C.HEADER}{title}{C.RESET}")
    for label, value in rows:
        print(f"  - {label}: {C.VALUE}{value}{C.RESET}")


# ---------------------------------------------------------------------------
# Verbose logging setup
# ---------------------------------------------------------------------------

DEFAULT_LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs")


def setup_verbose_logging(name: str = "stocks", level: int = logging.DEBUG,
                          log_dir: str | None = None) -> logging.Logger:
    """
    Create a logger that writes WARNING+ to the console and DEBUG+ to
    logs/<name>.log.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers on re-import
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console output is owned by the helpers above; only surface problems here
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    log_dir = log_dir or os.getenv("STOCKS_LOG_DIR", DEFAULT_LOG_DIR)
    os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(os.path.join(log_dir, f"{name}.log"))
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger
