"""
renderer.py

Responsibility: Deterministically render the generated project's files from `Answers`.

Rules:
- Rendering is pure: the same answers and dependencies always give byte-identical output.
- Each render function returns a mapping of project-relative path -> file contents.
- Files gated by an answer are simply absent from the mapping when the answer is false.
- Templates live in `templates/` next to this module and are rendered with Jinja2.

This module intentionally does NOT touch the filesystem outside of loading templates,
and knows nothing about the registry or the CLI.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from express_starter.answers import Answers
from express_starter.registry_client import Dependency

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

DEFAULT_PORT = 5000

ENTRYPOINT = "app.js"
MANIFEST = "package.json"
ENV_FILE = ".env"
ERROR_MIDDLEWARE = "middlewares/error.js"
ERROR_HANDLER = "utils/errorHandler.js"

DEV_DEPENDENCY_NAMES: tuple[str, ...] = ("nodemon",)


class RenderError(RuntimeError):
    pass


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, context: dict[str, Any]) -> str:
    try:
        return _environment().get_template(template_name).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template file: {template_name}") from e


def import_lines(answers: Answers) -> list[str]:
    # Order matters: framework, cors, error middleware, dotenv.
    lines = ['import express from "express";']
    if answers.use_cors:
        lines.append('import cors from "cors";')
    if answers.use_error_handler:
        lines.append('import { errorMiddleware } from "./middlewares/error.js";')
    if answers.use_env_file:
        lines.append('import dotenv from "dotenv";')
    return lines


def middleware_lines(answers: Answers) -> list[str]:
    lines = [
        "app.use(express.json());",
        "app.use(express.urlencoded({ extended: true }));",
    ]
    if answers.use_cors:
        lines.append('app.use(cors({ origin: "*", credentials: true }));')
    return lines


def dependency_names(answers: Answers) -> list[str]:
    """Packages for the manifest's `dependencies`, in lookup order."""
    names = ["express"]
    if answers.use_cors:
        names.append("cors")
    if answers.use_env_file:
        names.append("dotenv")
    return names


def _dependency_pairs(dependencies: Iterable[Dependency]) -> list[str]:
    return [f"{json.dumps(d.name)}: {json.dumps(d.version)}" for d in dependencies]


def render_error_files(answers: Answers) -> dict[str, str]:
    if not answers.use_error_handler:
        return {}
    return {
        ERROR_MIDDLEWARE: _render("middlewares/error.js.j2", {}),
        ERROR_HANDLER: _render("utils/errorHandler.js.j2", {}),
    }


def render_env_file(answers: Answers, port: int = DEFAULT_PORT) -> dict[str, str]:
    if not answers.use_env_file:
        return {}
    return {ENV_FILE: _render("env.j2", {"port": port})}


def render_entrypoint(answers: Answers) -> dict[str, str]:
    """
    Render `app.js`.

    The error middleware, when enabled, is registered after every route.
    """
    context = {
        "import_lines": import_lines(answers),
        "middleware_lines": middleware_lines(answers),
        "use_env_file": answers.use_env_file,
        "use_error_handler": answers.use_error_handler,
    }
    return {ENTRYPOINT: _render("app.js.j2", context)}


def render_manifest(
    answers: Answers,
    dependencies: Iterable[Dependency],
    dev_dependencies: Iterable[Dependency],
) -> dict[str, str]:
    """
    Render `package.json` with the resolved versions, keeping the order they were resolved in.
    """
    context = {
        "project_name": answers.project_name,
        "dependencies": _dependency_pairs(dependencies),
        "dev_dependencies": _dependency_pairs(dev_dependencies),
    }
    return {MANIFEST: _render("package.json.j2", context)}


def render_project(
    answers: Answers,
    dependencies: Iterable[Dependency],
    dev_dependencies: Iterable[Dependency],
) -> dict[str, str]:
    """
    Render every file of the project at once.
    """
    files: dict[str, str] = {}
    files.update(render_error_files(answers))
    files.update(render_env_file(answers))
    files.update(render_entrypoint(answers))
    files.update(render_manifest(answers, dependencies, dev_dependencies))
    return files
