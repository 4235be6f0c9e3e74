"""
Terminal rendering of portal content with rich.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED


def _timestamp(value: Optional[str]) -> str:
    # ISO 8601 from the API; show date and minutes only
    if not value:
        return ""
    return value.replace("T", " ")[:16]


def format_size(num_bytes: Optional[int]) -> str:
    if num_bytes is None:
        return "-"
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def sections_table(sections: List[Dict[str, Any]]) -> Table:
    table = Table(title="Sections", box=ROUNDED, show_lines=False)
    table.add_column("", width=2)
    table.add_column("Name", style="bold cyan")
    table.add_column("Description", style="dim")
    table.add_column("ID", style="dim", overflow="fold")
    for section in sections:
        table.add_row(
            section.get("icon", ""),
            section.get("name", ""),
            section.get("description") or "",
            section.get("id", ""),
        )
    return table


def files_table(files: List[Dict[str, Any]], server_url: str = "") -> Table:
    table = Table(title="Files", box=ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Section")
    table.add_column("Size", justify="right")
    table.add_column("Uploaded", style="dim")
    table.add_column("Download", style="blue", overflow="fold")
    for file in files:
        section = file.get("section") or {}
        table.add_row(
            file.get("fileName", ""),
            section.get("name", "[deleted]") if section else "[dim]deleted[/dim]",
            format_size(file.get("fileSize")),
            _timestamp(file.get("uploadedAt")),
            f"{server_url.rstrip('/')}{file.get('url', '')}",
        )
    return table


def news_panel(news: List[Dict[str, Any]], show_ids: bool = False) -> Group:
    if not news:
        return Group(Text("No news yet.", style="dim"))
    return Group(*[
        Panel(
            post.get("content", ""),
            title=f"[bold]{post.get('title', '')}[/bold]",
            subtitle=_timestamp(post.get("publishedAt")) + (f" | {post.get('id', '')}" if show_ids else ""),
            border_style="green",
        )
        for post in news
    ])


def knowledge_table(entries: List[Dict[str, Any]], title: str = "Knowledge base", show_ids: bool = False) -> Table:
    table = Table(title=title, box=ROUNDED, show_lines=True)
    table.add_column("Question", style="bold")
    table.add_column("Answer")
    if show_ids:
        table.add_column("ID", style="dim", overflow="fold")
    for entry in entries:
        row = [entry.get("question", ""), entry.get("answer", "")]
        if show_ids:
            row.append(entry.get("id", ""))
        table.add_row(*row)
    return table


def students_table(students: List[Dict[str, Any]]) -> Table:
    table = Table(title="Students", box=ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("University ID", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("ID", style="dim", overflow="fold")
    for student in students:
        table.add_row(
            student.get("fullName", ""),
            student.get("universityId", ""),
            _timestamp(student.get("createdAt")),
            student.get("id", ""),
        )
    return table


def user_panel(user: Dict[str, Any]) -> Panel:
    return Panel(
        f"[bold]Name:[/bold] {user.get('fullName', '')}\n"
        f"[bold]University ID:[/bold] {user.get('universityId', '')}\n"
        f"[bold]Role:[/bold] {user.get('role', '')}",
        title="Current user",
        border_style="green",
    )


def print_error(console: Console, message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")
