#!/usr/bin/env python3
"""BF6 Voice Switcher - Entry Point

Sets up logging and settings and builds the core ``VoiceSwitcher`` that a
presentation layer drives. Run directly it logs an environment report.
"""

import argparse
import faulthandler
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path

from settings import app_data_dir, apply_overrides, load_settings, save_settings
from steam_library import default_steam_roots
from voice_switcher import VoiceSwitcher


def setup_logging(log_dir: Path | None = None) -> tuple[logging.Logger, Path]:
    log_dir = log_dir or app_data_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "bf6voiceswitcher.log"

    handler = RotatingFileHandler(
        log_file,
        maxBytes=1 * 1024 * 1024,  # 1 MB
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s  %(levelname)-8s  %(message)s"))

    # core modules log under their own module names, so attach at the root
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    return logging.getLogger("bf6voiceswitcher"), log_dir


def install_crash_handler(logger: logging.Logger, log_dir: Path):
    def handle_exception(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logger.critical(
            "Unhandled exception:\n%s",
            "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
        )

    sys.excepthook = handle_exception

    # faulthandler can't go through logging after a hard crash
    crash_file = log_dir / "crash.log"
    faulthandler.enable(open(crash_file, "w"), all_threads=True)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BF6 Voice Switcher")
    parser.add_argument("--backup-dir")
    parser.add_argument("--game-data-dir")
    parser.add_argument("--no-persist-settings", action="store_true")
    return parser.parse_args(argv)


def create_switcher(args: argparse.Namespace, logger: logging.Logger) -> VoiceSwitcher:
    settings = apply_overrides(
        load_settings(),
        backup_dir=args.backup_dir,
        game_data_dir=args.game_data_dir,
    )
    if not args.no_persist_settings and (args.backup_dir or args.game_data_dir):
        save_settings(settings)

    roots = default_steam_roots(settings.extra_steam_roots)
    return VoiceSwitcher(
        settings.resolved_backup_dir(),
        game_data_dir=settings.game_data_dir,
        steam_roots=roots,
        app_id=settings.app_id,
        log_callback=logger.info,
    )


if __name__ == "__main__":
    args = parse_args()
    logger, log_dir = setup_logging()
    install_crash_handler(logger, log_dir)
    logger.info("Starting BF6 Voice Switcher")

    switcher = create_switcher(args, logger)
    switcher.detect_installation()
    for issue in switcher.validate_paths():
        logger.warning(issue)
    for record in switcher.list_backups():
        logger.info("Backup %s (build: %s)", record.lang_code, record.build_id or "unknown")
