from rich.console import Console

from lexi.config import ConfigStore
from lexi.models import Configuration

console = Console()

PROVIDER_GUIDE = """Available providers:
  - openai (GPT-4, GPT-3.5)
  - anthropic (Claude)
  - local (Ollama)
  - azure (Azure OpenAI)

Example setup:
  lexi config set provider openai
  lexi config set model gpt-4
  lexi config set api_key sk-...

For local Ollama:
  lexi config set provider local
  lexi config set model codellama
  lexi config set base_url http://localhost:11434"""


def print_configuration(name: str, config: Configuration) -> None:
    console.print(f"[bold]Lexi Configuration[/bold] (Profile: {name}):")
    console.print(f"   provider: {config.provider}")
    console.print(f"   model: {config.model}")
    console.print(f"   api_key: {config.masked_api_key()}")
    console.print(f"   base_url: {config.base_url or '(not set)'}")
    console.print(f"   temperature: {config.temperature}")
    console.print(f"   max_tokens: {config.max_tokens}")


class ConfigHandler:
    """``lexi config``: edits the active profile."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def set(self, key: str, value: str) -> None:
        profiles = self.store.load()
        profiles.set_value(profiles.active_profile, key, value)
        self.store.save(profiles)
        shown = profiles.active().masked_api_key() if key == "api_key" else value
        console.print(f"[green]Set {key} = {shown}[/green] (profile '{profiles.active_profile}')")
        if key == "api_key":
            console.print(f"API key saved to {self.store.path}")

    def list(self) -> None:
        profiles = self.store.load()
        print_configuration(profiles.active_profile, profiles.active())

    def init(self) -> None:
        console.print("[bold]Setting up Lexi configuration...[/bold]")
        console.print()
        console.print(PROVIDER_GUIDE, markup=False)
