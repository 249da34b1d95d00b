"""
express_starter package

Interactive generator that scaffolds a minimal Express.js server project.

Key responsibilities are split across modules:
- `answers.py`: the fixed list of questions and the collected `Answers`
- `registry_client.py`: isolated npm registry interactions (latest version lookups)
- `renderer.py`: deterministic rendering of the generated files from templates
- `writer.py`: directory creation and file writes for the new project
- `console.py`: all user-facing prompts and colored output
- `cli.py`: CLI entrypoint and orchestration (ask -> write -> resolve -> manifest)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
