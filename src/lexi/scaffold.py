"""Project scaffolding for ``lexi init``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from .exceptions import InputError

SAMPLE_PROGRAM = """# Sample Lexi Program
# Write your logic in plain English below

Create a function that takes a list of numbers and returns only the even ones greater than 10

Create a function to check if a string is a palindrome, ignoring case and spaces

Build a simple web server that responds with "Hello, World!" on GET requests to the root path
"""

README_TEMPLATE = """# {name}

A Lexi project - code generated from English descriptions using AI.

## Getting Started

1. Configure your LLM provider:
   ```bash
   lexi config set provider openai
   lexi config set model gpt-4
   lexi config set api_key sk-your-key-here
   ```

2. Write your logic in `src/main.lxi`

3. Compile:
   ```bash
   lexi compile src/main.lxi --target javascript --output build/main.js
   ```

4. Run:
   ```bash
   node build/main.js
   ```

## Commands

- `lexi compile <file.lxi>` - Compile to JavaScript (default)
- `lexi compile <file.lxi> --target python` - Compile to Python
- `lexi compile <file.lxi> --run` - Compile and run immediately
- `lexi config list` - Show current configuration

## Project Structure

```
{name}/
├── src/           # Your .lxi source files
├── build/         # Compiled output
├── lexi.config.json
└── README.md
```
"""


def project_descriptor(name: str) -> dict:
    return {
        "name": name,
        "version": "1.0.0",
        "defaultTarget": "javascript",
        "sourceDir": "src",
        "buildDir": "build",
        "targets": {
            "javascript": {"extension": ".js"},
            "python": {"extension": ".py"},
            "java": {"extension": ".java"},
        },
    }


def init_project(name: str, parent: Optional[Path] = None) -> Path:
    """Create the project skeleton and return its root directory."""

    root = (parent or Path.cwd()) / name
    if root.exists():
        raise InputError(f"Directory '{name}' already exists")

    (root / "src").mkdir(parents=True)
    (root / "build").mkdir()
    (root / "src" / "main.lxi").write_text(SAMPLE_PROGRAM, encoding="utf-8")
    (root / "lexi.config.json").write_text(
        json.dumps(project_descriptor(name), indent=2), encoding="utf-8"
    )
    (root / "README.md").write_text(README_TEMPLATE.format(name=name), encoding="utf-8")
    return root
