"""
Astrology - command line entry point

Prints today's horoscope for a zodiac sign or a month-day date:

    astrology-horoscope --sign aries
    astrology-horoscope --date 05-04 --config credentials.yaml

Exit codes: 0 success, 1 request failure, 2 bad input or configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .config import load_settings_from_env, load_settings_from_yaml
from .errors import (
    AllClientsBlockedError,
    AstrologyError,
    ConfigurationError,
    InvalidDateError,
    NoMatchingSignError,
)
from .failover import Astrology


def setup_logging(log_level: str, log_file: Optional[Path]) -> logging.Logger:
    logger = logging.getLogger("astrology")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.handlers.clear()

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Logs go to stderr so stdout carries only the prediction
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.setLevel(logger.level)
    logger.addHandler(ch)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(logger.level)
        logger.addHandler(fh)

    return logger


def parse_month_day(raw: str) -> Tuple[int, int]:
    """Parse ``MM-DD`` (or ``MM/DD``) into a (month, day) pair."""
    parts = raw.replace("/", "-").split("-")
    if len(parts) != 2:
        raise InvalidDateError(f"Expected MM-DD, got '{raw}'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidDateError(f"Expected MM-DD, got '{raw}'") from e


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Daily horoscope from the Prokerala API")
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument("--sign", help="Zodiac sign name, e.g. aries")
    target.add_argument("--date", help="Month and day as MM-DD; resolved to its sign")
    p.add_argument(
        "--config",
        default="",
        help="YAML file with client credentials (default: PROKERALA_* env vars).",
    )
    p.add_argument(
        "--date-format",
        default="%Y-%m-%d",
        help="strftime format for the prediction date in the header line.",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    p.add_argument(
        "--log-file",
        default="",
        help="Optional log file path (e.g., logs/astrology.log).",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    log_file = Path(args.log_file) if args.log_file.strip() else None
    logger = setup_logging(args.log_level, log_file)

    try:
        settings = (
            load_settings_from_yaml(args.config)
            if args.config.strip()
            else load_settings_from_env()
        )
        target = args.sign if args.sign else parse_month_day(args.date)
    except (ConfigurationError, InvalidDateError) as e:
        logger.error("%s", e)
        return 2

    with Astrology.from_settings(settings) as api:
        try:
            prediction = api.daily_prediction(target)
        except (InvalidDateError, NoMatchingSignError) as e:
            logger.error("%s", e)
            return 2
        except AllClientsBlockedError as e:
            logger.error("%s Try again later.", e)
            return 1
        except AstrologyError as e:
            logger.error("%s", e)
            return 1

    print(f"{prediction.sign_name} - {prediction.format_date(args.date_format)}")
    print(prediction.text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
