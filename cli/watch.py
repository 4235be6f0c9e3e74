"""
`campus-portal watch`: live terminal views driven by the realtime channel.

Fetch the lists once, attach to /ws, then apply each event and redraw.
"""

import json
import websockets
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from cli import renderer
from cli.client import PortalClient
from cli.config import CLIConfig
from cli.live_view import EVENT_ROUTES, PortalViews

VIEWS = ("sections", "files", "news", "knowledge")

# Events each view needs; the server narrows delivery to these
VIEW_EVENTS = {
    "sections": ["section-added", "section-deleted"],
    "files": ["section-deleted", "file-uploaded", "file-deleted"],
    "news": ["news-published", "news-deleted"],
    "knowledge": ["knowledge-added", "knowledge-deleted"],
}


def render(views: PortalViews, view: str, config: CLIConfig, status: str) -> Group:
    if view == "sections":
        body = renderer.sections_table(views["sections"].items)
    elif view == "files":
        if views.selected_section is None:
            body = Text("Section was deleted.", style="yellow")
        else:
            body = renderer.files_table(views["files"].items, config.server_url)
    elif view == "news":
        body = renderer.news_panel(views["news"].items)
    else:
        body = renderer.knowledge_table(views["knowledge"].items)
    return Group(body, Text(status, style="dim"))


async def load(client: PortalClient, views: PortalViews, view: str, section_id: Optional[str]) -> None:
    if view == "sections":
        views["sections"].reset(await client.sections())
    elif view == "files":
        views.select_section(section_id, await client.files(section_id))
    elif view == "news":
        views["news"].reset(await client.news())
    else:
        # Students can only search; the full list is an admin route
        views["knowledge"].reset(await client.knowledge_base())


async def watch(config: CLIConfig, console: Console, view: str, section_id: Optional[str] = None) -> None:
    """Run until the connection closes or the user interrupts"""
    if view == "files" and not section_id:
        raise ValueError("watch files needs a section id")

    views = PortalViews(selected_section=section_id)
    async with PortalClient(config) as client:
        await load(client, views, view, section_id)

    url = f"{config.ws_url}?token={config.auth_token}"
    async with websockets.connect(url) as ws:
        unwanted = sorted(set(EVENT_ROUTES) - set(VIEW_EVENTS[view]))
        await ws.send(json.dumps({"type": "unsubscribe", "data": {"events": unwanted}}))

        status = "Connected. Waiting for updates (Ctrl+C to quit)"
        with Live(render(views, view, config, status), console=console, refresh_per_second=4) as live:
            try:
                async for raw in ws:
                    message = json.loads(raw)
                    if views.apply(message):
                        status = f"Last update: {message['type']} at {message.get('timestamp', '')[:19]}"
                        live.update(render(views, view, config, status))
            except websockets.exceptions.ConnectionClosed:
                live.update(render(views, view, config, "Disconnected. Restart watch to refresh."))
