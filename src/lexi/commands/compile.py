from pathlib import Path
from typing import Optional

from rich.console import Console

from lexi import __version__
from lexi.compiler import LexiCompiler

console = Console()


class CompileHandler:
    def __init__(self, compiler: LexiCompiler):
        self.compiler = compiler

    def run(
        self,
        input: Path,
        target: str,
        output: Optional[Path],
        run: bool,
    ) -> None:
        console.print(f"[bold]Lexi v{__version__}[/bold] - Compiling {input}...")
        with console.status("Generating code with AI..."):
            result = self.compiler.compile(input, target=target, output_path=output, run=False)
        console.print(f"[green]Successfully compiled to {result.output_path}[/green]")

        if not run:
            return
        console.print(f"Running {result.output_path}...")
        returncode = self.compiler.run_output(result.output_path, target)
        if returncode is None:
            console.print(f"[yellow]Auto-run not supported for {target} yet[/yellow]")
        elif returncode != 0:
            console.print(f"[yellow]Program exited with status {returncode}[/yellow]")
