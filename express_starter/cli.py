"""
cli.py

Responsibility: CLI entrypoint for express-starter.

High-level flow (single command):
1) Collect answers (prompts, an answers file, or defaults)
2) Create the project directory tree
3) Write the optional error-handling and `.env` files
4) Render and write `app.js`
5) Resolve latest dependency versions from the npm registry (parallel batches)
6) Render and write `package.json`
7) Print next steps

A failure at any step stops the run. Files already written are left in place.

This module should orchestrate behavior but keep concerns isolated:
- Questions / answers: `answers.py`
- Rendering: `renderer.py`
- Filesystem: `writer.py`
- Registry API: `registry_client.py`
- Terminal output: `console.py`
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from express_starter import __version__
from express_starter.answers import Answers, AnswersError, collect_answers, default_answers, load_answers
from express_starter.console import Presenter
from express_starter.registry_client import DEFAULT_REGISTRY_URL, RegistryClient, RegistryError
from express_starter.renderer import (
    DEV_DEPENDENCY_NAMES,
    RenderError,
    dependency_names,
    render_entrypoint,
    render_env_file,
    render_error_files,
    render_manifest,
)
from express_starter.writer import WriteError, ensure_project_dirs, write_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateResult:
    """Outcome of one run: either the created project or the error that stopped it."""

    project_dir: Path | None = None
    written: list[Path] = field(default_factory=list)
    error: Exception | None = None
    stage: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _generate(
    answers: Answers,
    *,
    output_dir: Path,
    client: RegistryClient,
    written: list[Path],
) -> Path:
    project_dir = output_dir / answers.project_name
    ensure_project_dirs(project_dir)

    written += write_files(project_dir, render_error_files(answers))
    written += write_files(project_dir, render_env_file(answers))
    written += write_files(project_dir, render_entrypoint(answers))

    dependencies = client.resolve_all(dependency_names(answers))
    dev_dependencies = client.resolve_all(DEV_DEPENDENCY_NAMES)

    written += write_files(project_dir, render_manifest(answers, dependencies, dev_dependencies))
    return project_dir


def create_app(
    presenter: Presenter,
    *,
    answers: Answers | None = None,
    output_dir: str | Path = ".",
    client: RegistryClient | None = None,
) -> CreateResult:
    """
    Run the whole generation and report how it went.

    Errors are returned in the result, not raised. Nothing is rolled back.
    """
    presenter.intro()
    try:
        if answers is None:
            answers = collect_answers(presenter)
    except AnswersError as e:
        return CreateResult(error=e, stage="answers")

    written: list[Path] = []
    try:
        project_dir = _generate(
            answers,
            output_dir=Path(output_dir),
            client=client or RegistryClient(),
            written=written,
        )
    except WriteError as e:
        return CreateResult(written=written, error=e, stage="filesystem")
    except RegistryError as e:
        return CreateResult(written=written, error=e, stage="registry")
    except RenderError as e:
        return CreateResult(written=written, error=e, stage="render")

    presenter.success(answers.project_name)
    return CreateResult(project_dir=project_dir, written=written)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.WARNING
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _timeout_from_env() -> float | None:
    raw = os.environ.get("EXPRESS_STARTER_TIMEOUT", "").strip()
    return float(raw) if raw else None


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="express-starter", description="Scaffold a minimal Express.js server project")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--output-dir", default=".", help="Directory to create the project in (default: .)")

    src = p.add_mutually_exclusive_group()
    src.add_argument("--answers", default=None, help="YAML file with answers (skips prompting)")
    src.add_argument("-y", "--yes", action="store_true", help="Accept every default without prompting")

    p.add_argument(
        "--registry-url",
        default=None,
        help=f"npm registry URL (or set env NPM_REGISTRY_URL; default: {DEFAULT_REGISTRY_URL})",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Registry request timeout in seconds (or set env EXPRESS_STARTER_TIMEOUT; default: none)",
    )

    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.verbose), bool(args.quiet))

    presenter = Presenter()
    try:
        answers: Answers | None = None
        if args.answers:
            answers = load_answers(args.answers)
        elif args.yes:
            answers = default_answers()
        registry_url = args.registry_url or os.environ.get("NPM_REGISTRY_URL") or DEFAULT_REGISTRY_URL
        timeout = args.timeout if args.timeout is not None else _timeout_from_env()
        client = RegistryClient(registry_url, timeout=timeout)
    except (AnswersError, RegistryError, ValueError) as e:
        presenter.failure(e)
        return 2

    result = create_app(presenter, answers=answers, output_dir=args.output_dir, client=client)
    if not result.ok:
        logger.debug("Run stopped during %s", result.stage, exc_info=result.error)
        presenter.failure(result.error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
