# src/ddp/app.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

from canonicalizer.model import CleaningConfiguration
from crawler.model import FetchSettings
from crawler.utils.url_utils import UrlUtils
from ddp.core.controllers.compare_controller import CompareController
from ddp.core.errors import DDPError
from ddp.core.managers.config_manager import config_manager
from ddp.core.managers.report_manager import ReportManager
from ddp.core.services.clean_config_service import load_clean_config
from ddp.core.services.diff_service import DIFF_EXECUTABLE, ensure_diff_available
from ddp.core.services.prompt_service import PromptService
from ddp.core.utils.configure_logging import configure_logger
from ddp.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

STDOUT_OUTPUT = "stdout"

DESCRIPTION = """\
Diff-Dev-Prod: view useful differences between development source code and
deployed production code.

Both the built HTML and the deployed HTML are "cleaned" before comparison:
comments are removed, whitespace is collapsed and attributes are sorted.
Custom rules can empty or remove elements, and empty or remove attributes.
They are passed as JSON with --clean-config (inline, a file path, or 'stdin'):

  {
    "elements": [
      {"selector": "script", "contains": "analytics", "containsRegex": "v\\\\d+",
       "containsRegexFlags": "i", "remove": true, "empty": false, "replacement": "text"}
    ],
    "attributes": [
      {"attribute": "id", "selector": "div", "contains": "...", "containsRegex": "...",
       "containsRegexFlags": "i", "remove": true, "empty": false, "replacement": "text"}
    ]
  }

Elements are emptied by default ('remove' wins over 'empty'); attributes are
removed by default ('empty' wins over 'remove'). Replacements for elements are
always written as an HTML comment.
"""

EXAMPLES = """\
examples:
  ddp https://example.com
  ddp --interactive https://example.com
  ddp --clean-config='{ "elements": [{ "selector": "head" }] }' https://example.com
  ddp --clean-config="clean-config.json" https://example.com
  cat clean-config.json | ddp --clean-config=stdin https://example.com
  ddp --quiet --output=stdout https://example.com
"""


def _package_version() -> str:
    try:
        return version("diff-dev-prod")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddp",
        description=DESCRIPTION,
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "domain", nargs="?",
        help="The root domain to compare our local HTML against. Optional in interactive mode.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument(
        "-i", "--interactive", action="store_true",
        help="Prompt for inputs that were not explicitly received.",
    )
    parser.add_argument("-b", "--build-dir", help='The directory of your built HTML files. Defaults to "build".')
    parser.add_argument(
        "-o", "--output",
        help='The filename of the HTML diff report. "stdout" echoes the unified diff instead.',
    )
    parser.add_argument(
        "-c", "--clean-config",
        help="A JSON string, a path to a JSON file, or 'stdin' for piped JSON.",
    )
    parser.add_argument("--reorder-head", action="store_true", help="Sort the children of <head> before comparing.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress messages and warnings.")
    return parser


def _resolve_domain(args: argparse.Namespace, prompts: Optional[PromptService]) -> str:
    domain = args.domain
    if not domain:
        if prompts is None:
            raise DDPError("No domain argument passed. Run 'ddp -h' to view help information.")
        domain = prompts.input(
            "Enter the full root domain (e.g. https://example.com):",
            required_message="You must enter a value for the root domain.",
        )
    return UrlUtils.normalize_root_domain(domain)


def _log_clean_config(clean_config: CleaningConfiguration) -> None:
    if clean_config.is_empty:
        logger.info("No clean config set.")
        return
    logger.info(
        "Using clean config:\n%s",
        json.dumps(clean_config.model_dump(by_alias=True, exclude_none=True), indent=2),
    )


def run(args: argparse.Namespace, prompts: Optional[PromptService] = None) -> int:
    diff_executable = config_manager.get_nested("diff.executable", DIFF_EXECUTABLE)
    ensure_diff_available(diff_executable)

    if args.interactive and prompts is None:
        prompts = PromptService()
    if not args.interactive:
        prompts = None

    root_domain = _resolve_domain(args, prompts)
    logger.info("Using domain %s", root_domain)

    default_build_directory = config_manager.get_nested("build.directory", "build")
    default_output = f"{UrlUtils.get_domain_without_subdomain(root_domain)}.diff.html"

    build_directory = args.build_dir
    if not build_directory:
        build_directory = (
            prompts.input("Enter the build folder path:", default=default_build_directory)
            if prompts else default_build_directory
        )
    output = args.output
    if not output:
        output = (
            prompts.input("Enter the name of the output file:", default=default_output)
            if prompts else default_output
        )

    if not Path(build_directory).is_dir():
        raise DDPError(f'The directory "{build_directory}" does not exist, exiting.')

    clean_config = load_clean_config(args.clean_config)
    if clean_config is None:
        clean_config = prompts.build_clean_config() if prompts else CleaningConfiguration()
    _log_clean_config(clean_config)

    overrides = {"clean_config": clean_config}
    if args.reorder_head:
        overrides["reorder_head_tags"] = True
    options = config_manager.canonicalize_options(**overrides)

    fetch_settings = FetchSettings(
        concurrency=int(config_manager.get_nested("session.concurrency", 10)),
        timeout=int(config_manager.get_nested("session.time_out", 30)),
        user_agent=config_manager.get_nested("session.user_agent"),
    )
    controller = CompareController(
        root_domain=root_domain,
        build_directory=Path(build_directory),
        options=options,
        cache_root=PathUtils.get_cache_root(config_manager.get_nested("cache.directory", ".ddp-cache")),
        fetch_settings=fetch_settings,
        diff_executable=diff_executable,
        workers=config_manager.get_nested("canonicalizer.workers"),
        show_progress=not args.quiet,
    )
    diff_output = controller.run()

    if output == STDOUT_OUTPUT:
        sys.stdout.write(diff_output)
    else:
        ReportManager().save_report(Path(output), diff_output, title=root_domain)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the `ddp` command."""
    args = build_parser().parse_args(argv)

    level = "ERROR" if args.quiet else config_manager.get_nested("debug.level", "INFO")
    configure_logger(level, silenced_loggers={"asyncio": "WARNING"})

    try:
        return run(args)
    except DDPError as e:
        logger.error("%s", e)
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
