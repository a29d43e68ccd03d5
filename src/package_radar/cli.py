"""Command-line entry point: ``package-radar PATH [PATH ...]``.

One directory runs a project scan, one file runs a single-file scan, and
several files run a selected-files scan.  The report is printed as
Markdown, or as JSON with ``--json``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence

import httpx

from package_radar.domain.entities import AnalysisReport
from package_radar.domain.exceptions import (
    InvalidInputError,
    NoPackagesFoundError,
    PackageRadarError,
)
from package_radar.infrastructure.config import Settings, get_settings
from package_radar.interface.dependencies import build_use_case
from package_radar.interface.schemas import AnalysisResponse
from package_radar.services.report_renderer import render_markdown

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="package-radar",
        description="Report which npm packages a JavaScript/TypeScript project uses.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="A project directory, a source file, or several source files.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of Markdown.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL from the environment).",
    )
    return parser


async def _run(paths: Sequence[str], settings: Settings) -> AnalysisReport:
    timeout = httpx.Timeout(settings.request_timeout_seconds)
    async with httpx.AsyncClient(timeout=timeout) as client:
        use_case = build_use_case(client, settings)
        if len(paths) > 1:
            return await use_case.analyze_files(paths)
        if os.path.isdir(paths[0]):
            return await use_case.analyze_directory(paths[0])
        return await use_case.analyze_file(paths[0])


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        stream=sys.stderr,
    )

    try:
        report = asyncio.run(_run(args.paths, settings))
    except NoPackagesFoundError as exc:
        print(str(exc))
        return EXIT_OK
    except InvalidInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except PackageRadarError as exc:
        logger.error("Analysis failed: %s", exc)
        return EXIT_FAILURE

    if args.json:
        print(AnalysisResponse.from_report(report).model_dump_json(indent=2))
    else:
        print(render_markdown(report))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
