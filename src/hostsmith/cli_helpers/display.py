"""
Display helper functions for the hostsmith CLI
"""

from typing import Dict, List, Sequence, Tuple

from rich.console import Console
from rich.table import Table

console = Console()


def display_entries(entries: Sequence[Tuple[str, str]], title: str = "Hosts Entries") -> None:
    """Pretty-print a table of address → domain entries."""
    table = Table(title=title, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Address", style="green", no_wrap=True)
    table.add_column("Domain", style="cyan")

    for index, (address, domain) in enumerate(entries, start=1):
        table.add_row(str(index), address, domain)

    console.print(table)


def display_regions(managed: Dict[str, str], backups: List[str]) -> None:
    """Show what hostsmith currently owns in the file."""
    table = Table(title="Managed Region", header_style="bold magenta")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Address", style="green")
    for domain, address in managed.items():
        table.add_row(domain, address)
    console.print(table)

    if backups:
        console.print("[bold blue]Backed up lines:[/bold blue]")
        for line in backups:
            console.print(f"  {line}", markup=False, highlight=False)
    else:
        console.print("[dim]No backed up lines.[/dim]")


def display_content(content: str) -> None:
    """Print rewritten file content verbatim."""
    console.print(content, markup=False, highlight=False, end="")


def display_success(message: str):
    """Display success message"""
    console.print(f"[green]✅ {message}[/green]")


def display_error(message: str):
    """Display error message"""
    console.print(f"[red]❌ {message}[/red]")


def display_info(message: str):
    """Display info message"""
    console.print(f"[blue]ℹ️  {message}[/blue]")
