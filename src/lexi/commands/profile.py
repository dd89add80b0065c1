from rich.console import Console
from rich.table import Table

from lexi.config import ConfigStore

console = Console()


class ProfileHandler:
    """``lexi profile``: CRUD over the named profiles, saved after every change."""

    def __init__(self, store: ConfigStore):
        self.store = store

    def list(self) -> None:
        profiles = self.store.load()
        table = Table(title="Available profiles")
        table.add_column("Name")
        table.add_column("Provider")
        table.add_column("Model")
        table.add_column("Active")
        for name, config in profiles.profiles.items():
            marker = "*" if name == profiles.active_profile else ""
            table.add_row(name, config.provider, config.model, marker)
        console.print(table)

    def use(self, name: str) -> None:
        profiles = self.store.load()
        profiles.use(name)
        self.store.save(profiles)
        console.print(f"[green]Switched to profile '{name}'[/green]")

    def create(self, name: str) -> None:
        profiles = self.store.load()
        if not profiles.create(name):
            console.print(f"[yellow]Profile '{name}' already exists[/yellow]")
            return
        self.store.save(profiles)
        console.print(f"[green]Created and switched to profile '{name}'[/green]")
        console.print("Configure it with: lexi config set <key> <value>")

    def delete(self, name: str) -> None:
        profiles = self.store.load()
        reset = profiles.delete(name)
        self.store.save(profiles)
        if reset:
            console.print("Switched back to 'default' profile")
        console.print(f"[green]Deleted profile '{name}'[/green]")

    def current(self) -> None:
        console.print(f"Current profile: {self.store.load().active_profile}")

    def set(self, name: str, key: str, value: str) -> None:
        profiles = self.store.load()
        profiles.set_value(name, key, value)
        self.store.save(profiles)
        shown = profiles.get(name).masked_api_key() if key == "api_key" else value
        console.print(f"[green]Set {key} = {shown} for profile '{name}'[/green]")
