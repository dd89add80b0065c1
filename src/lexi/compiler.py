"""Compile flow: .lxi source -> prompt -> provider -> sanitized output file."""

from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .config import ConfigStore
from .exceptions import ExecutionError, InputError
from .llm_client import LLMClient, build_llm_client
from .models import CompileResult, Configuration
from .prompts_loader import PromptRepository, build_prompt
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".lxi", ".lexi")
DEFAULT_TARGET = "javascript"

TARGET_EXTENSIONS = {
    "javascript": ".js",
    "typescript": ".ts",
    "python": ".py",
    "java": ".java",
    "cpp": ".cpp",
    "c": ".c",
    "csharp": ".cs",
    "rust": ".rs",
    "go": ".go",
    "ruby": ".rb",
    "php": ".php",
    "sql": ".sql",
    "mongodb": ".js",
    "redis": ".txt",
}
FALLBACK_EXTENSION = ".txt"


def default_output_path(input_path: Path, target: str) -> Path:
    """``<stem><ext>`` in the current directory, extension chosen by target."""
    extension = TARGET_EXTENSIONS.get(target, FALLBACK_EXTENSION)
    return Path(f"{Path(input_path).stem}{extension}")


def interpreter_command(output_path: Path, target: str) -> Optional[List[str]]:
    if target == "javascript":
        return ["node", str(output_path)]
    if target == "python":
        return [sys.executable or "python", str(output_path)]
    return None


class LexiCompiler:
    """Turns an English description into a source file via the active profile."""

    def __init__(
        self,
        store: ConfigStore,
        client_factory: Callable[[Configuration], LLMClient] = build_llm_client,
        prompt_repo: PromptRepository | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.store = store
        self.client_factory = client_factory
        self.prompt_repo = prompt_repo or PromptRepository()
        self.runner = runner

    def read_source(self, input_path: Path) -> str:
        input_path = Path(input_path)
        if not input_path.name.endswith(SOURCE_EXTENSIONS):
            raise InputError("Input file must have .lxi or .lexi extension")
        if not input_path.is_file():
            raise InputError(f"File '{input_path}' not found")

        try:
            source = input_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InputError(f"File '{input_path}' is not valid UTF-8 text") from exc
        except OSError as exc:
            raise InputError(f"Cannot read '{input_path}': {exc}") from exc
        if not source.strip():
            raise InputError("Source file is empty")
        return source

    def generate(self, source_text: str, target: str) -> str:
        """Ask the configured provider for code and clean up the reply."""
        config = self.store.active_configuration()
        client = self.client_factory(config)
        system_prompt, user_prompt = build_prompt(source_text, target, self.prompt_repo)
        raw = client.complete(system_prompt, user_prompt)
        return sanitize(raw)

    def compile(
        self,
        input_path: Path,
        target: str = DEFAULT_TARGET,
        output_path: Optional[Path] = None,
        run: bool = False,
    ) -> CompileResult:
        input_path = Path(input_path)
        source = self.read_source(input_path)
        out_path = Path(output_path) if output_path else default_output_path(input_path, target)

        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise InputError(f"Cannot create output directory '{out_path.parent}': {exc}") from exc

        logger.info("Compiling %s to %s (%s)", input_path, out_path, target)
        code = self.generate(source, target)
        try:
            out_path.write_text(code, encoding="utf-8")
        except OSError as exc:
            raise InputError(f"Cannot write '{out_path}': {exc}") from exc

        result = CompileResult(input_path=input_path, output_path=out_path, target=target, code=code)
        if run:
            result.run_returncode = self.run_output(out_path, target)
        return result

    def run_output(self, output_path: Path, target: str) -> Optional[int]:
        """Execute the generated file; None when the target has no runner."""
        command = interpreter_command(output_path, target)
        if command is None:
            logger.info("No runner for target %s", target)
            return None

        logger.debug("Running %s", " ".join(command))
        try:
            completed = self.runner(command, check=False)
        except FileNotFoundError as exc:
            raise ExecutionError(f"Interpreter '{command[0]}' not found for target {target}") from exc
        return completed.returncode
