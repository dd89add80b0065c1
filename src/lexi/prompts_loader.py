"""Prompt loading and rendering helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Optional

from .exceptions import PromptNotFoundError

PROMPT_DIR = Path(__file__).resolve().parent / "prompts"

# Targets with a dedicated template; everything else renders "general".
DEDICATED_TEMPLATES = ("sql", "mongodb", "redis")


class PromptRepository:
    """Loads prompt templates from the prompts/ directory and renders them."""

    def __init__(self, root: Path | None = None):
        self.root = root or PROMPT_DIR

    @lru_cache(maxsize=32)
    def load(self, name: str) -> tuple[Template, Template]:
        """Load system and user templates."""
        system_path = self.root / f"{name}.system.txt"
        user_path = self.root / f"{name}.user.txt"

        if not system_path.exists() or not user_path.exists():
            raise PromptNotFoundError(f"Prompt '{name}' files not found in {self.root}")

        return (
            Template(system_path.read_text(encoding="utf-8")),
            Template(user_path.read_text(encoding="utf-8")),
        )

    def render(self, name: str, **kwargs) -> dict[str, str]:
        """Render system and user prompts."""
        system_tmpl, user_tmpl = self.load(name)
        return {
            "system": system_tmpl.safe_substitute(**kwargs).strip(),
            "user": user_tmpl.safe_substitute(**kwargs).strip(),
        }


def template_for(target: str) -> str:
    return target if target in DEDICATED_TEMPLATES else "general"


def build_prompt(
    source_text: str,
    target: str,
    repository: Optional[PromptRepository] = None,
) -> tuple[str, str]:
    """Return the (system, user) prompt pair for ``target``.

    The source text is embedded verbatim in the user prompt.
    """
    repo = repository or PromptRepository()
    rendered = repo.render(template_for(target), target=target, source_text=source_text)
    return rendered["system"], rendered["user"]
