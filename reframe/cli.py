# reframe/cli.py
# Entry point: export the newest batch of master images to every platform preset.

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from reframe.controllers.batch_controller import BatchController
from reframe.models.settings import ExportSettings, parse_fit_mode
from reframe.utils.logging_utils import build_logger


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Reframe master images into social platform exports.")
    ap.add_argument("--root", type=Path, help="Assets root holding batch directories (EXPORT_ROOT)")
    ap.add_argument("--batch", help="Batch directory name (default: newest by name)")
    ap.add_argument("--mode", help="cover, contain or blurred-contain (EXPORT_MODE)")
    ap.add_argument("--env-file", type=Path, help="Read settings from this .env file")
    ap.add_argument("--log-dir", type=Path, help="Also write a rotating log file here")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = build_logger("reframe", log_dir=args.log_dir,
                       level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.env_file is not None and not args.env_file.is_file():
            raise FileNotFoundError(f"Env file not found: {args.env_file}")
        # Real environment variables win over .env entries.
        load_dotenv(args.env_file or find_dotenv(usecwd=True))

        settings = ExportSettings.from_env()
        overrides = {}
        if args.root is not None:
            overrides["root"] = args.root
        if args.mode:
            overrides["fit_mode"] = parse_fit_mode(args.mode)
        if overrides:
            settings = dataclasses.replace(settings, **overrides)

        BatchController(settings, log).run(batch=args.batch)
    except Exception as e:
        log.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
