#!/usr/bin/env python3
"""
Campus Portal CLI - Main Entry Point

Usage:
    campus-portal login                 # Login with university ID and password
    campus-portal sections              # List sections
    campus-portal files <sectionId>     # List files in a section
    campus-portal news                  # Read news
    campus-portal search "refund"       # Ask the assistant
    campus-portal watch sections        # Live view, updated as admins make changes
    campus-portal admin news publish "Exams" "Timetable is out"
"""

import argparse
import asyncio
import sys
from typing import Optional

import httpx
from rich.console import Console
from rich.prompt import Prompt

from cli import renderer
from cli.client import PortalClient, PortalClientError
from cli.config import CLIConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="campus-portal",
        description="Campus Portal - terminal client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  campus-portal login                          Login to your account
  campus-portal whoami                         Show current user
  campus-portal sections                       List sections
  campus-portal files 3f2c...                  Files in a section
  campus-portal search "library hours"         Search the knowledge base
  campus-portal watch news                     Follow news as it is published
  campus-portal admin section add CS101 💻     Create a section
  campus-portal admin file upload notes.pdf -s 3f2c...
                                               Upload a file into a section
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    login_parser = subparsers.add_parser("login", help="Login with university ID and password")
    login_parser.add_argument("--university-id", "-u", help="University ID (prompted if omitted)")

    subparsers.add_parser("logout", help="Forget the stored token")
    subparsers.add_parser("whoami", help="Show current user info")
    subparsers.add_parser("sections", help="List sections")

    files_parser = subparsers.add_parser("files", help="List files in a section")
    files_parser.add_argument("section_id", help="Section ID")

    subparsers.add_parser("news", help="Read news, newest first")

    search_parser = subparsers.add_parser("search", help="Search the knowledge base")
    search_parser.add_argument("query", help="Text to look for in questions and answers")

    watch_parser = subparsers.add_parser("watch", help="Live view of sections, files, news or the knowledge base")
    watch_parser.add_argument("view", nargs="?", choices=["sections", "files", "news", "knowledge"], default="sections")
    watch_parser.add_argument("--section", "-s", dest="section_id", help="Section ID (for the files view)")

    admin_parser = subparsers.add_parser("admin", help="Manage portal content (admin accounts only)")
    resources = admin_parser.add_subparsers(dest="resource", help="What to manage")

    section_parser = resources.add_parser("section", help="Sections")
    section_actions = section_parser.add_subparsers(dest="action")
    section_actions.add_parser("ls", help="List sections")
    section_add = section_actions.add_parser("add", help="Create a section")
    section_add.add_argument("name")
    section_add.add_argument("icon", help="Icon, usually an emoji")
    section_add.add_argument("--description", "-d")
    section_rm = section_actions.add_parser("rm", help="Delete a section (its files are kept)")
    section_rm.add_argument("id")

    file_parser = resources.add_parser("file", help="Uploaded files")
    file_actions = file_parser.add_subparsers(dest="action")
    file_actions.add_parser("ls", help="List every uploaded file")
    file_upload = file_actions.add_parser("upload", help="Upload a local file into a section")
    file_upload.add_argument("path")
    file_upload.add_argument("--section", "-s", required=True, dest="section_id")
    file_upload.add_argument("--name", "-n", dest="file_name", help="Display name (default: the file's name)")
    file_rm = file_actions.add_parser("rm", help="Delete a file")
    file_rm.add_argument("id")

    news_parser = resources.add_parser("news", help="News posts")
    news_actions = news_parser.add_subparsers(dest="action")
    news_actions.add_parser("ls", help="List news, newest first")
    news_publish = news_actions.add_parser("publish", help="Publish a news post")
    news_publish.add_argument("title")
    news_publish.add_argument("content")
    news_rm = news_actions.add_parser("rm", help="Delete a news post")
    news_rm.add_argument("id")

    kb_parser = resources.add_parser("kb", help="Knowledge base")
    kb_actions = kb_parser.add_subparsers(dest="action")
    kb_actions.add_parser("ls", help="List knowledge base entries")
    kb_add = kb_actions.add_parser("add", help="Add a question and its answer")
    kb_add.add_argument("question")
    kb_add.add_argument("answer")
    kb_rm = kb_actions.add_parser("rm", help="Delete an entry")
    kb_rm.add_argument("id")

    student_parser = resources.add_parser("student", help="Student accounts")
    student_actions = student_parser.add_subparsers(dest="action")
    student_actions.add_parser("ls", help="List students")
    student_add = student_actions.add_parser("add", help="Create a student account")
    student_add.add_argument("university_id")
    student_add.add_argument("full_name")
    student_add.add_argument("--password", "-p", help="Initial password (prompted if omitted)")
    student_rm = student_actions.add_parser("rm", help="Delete a student account")
    student_rm.add_argument("id")

    parser.add_argument(
        "--server-url",
        type=str,
        help="Portal server URL (default: http://localhost:5000 or CAMPUS_PORTAL_URL)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


async def run_admin(args: argparse.Namespace, client: PortalClient, config: CLIConfig, console: Console) -> int:
    """``campus-portal admin <resource> <action>``; every change is pushed live to watchers"""
    resource, action = args.resource, getattr(args, "action", None)
    if not resource or not action:
        console.print("[yellow]Usage: campus-portal admin {section,file,news,kb,student} {ls,add,rm,...}[/yellow]")
        return 1

    if resource == "section":
        if action == "ls":
            console.print(renderer.sections_table(await client.admin_sections()))
        elif action == "add":
            section = await client.create_section(args.name, args.icon, args.description)
            console.print(f"[green]✓ Section created[/green] {section['icon']} {section['name']} [dim]{section['id']}[/dim]")
        else:
            console.print(f"[green]✓ {(await client.delete_section(args.id))['message']}[/green]")

    elif resource == "file":
        if action == "ls":
            console.print(renderer.files_table(await client.admin_files(), config.server_url))
        elif action == "upload":
            record = await client.upload_file(args.path, args.section_id, args.file_name)
            console.print(f"[green]✓ Uploaded[/green] {record['fileName']} ({renderer.format_size(record.get('fileSize'))}) "
                          f"[dim]{record['id']}[/dim]")
        else:
            console.print(f"[green]✓ {(await client.delete_file(args.id))['message']}[/green]")

    elif resource == "news":
        if action == "ls":
            console.print(renderer.news_panel(await client.admin_news(), show_ids=True))
        elif action == "publish":
            post = await client.publish_news(args.title, args.content)
            console.print(f"[green]✓ Published[/green] {post['title']} [dim]{post['id']}[/dim]")
        else:
            console.print(f"[green]✓ {(await client.delete_news(args.id))['message']}[/green]")

    elif resource == "kb":
        if action == "ls":
            console.print(renderer.knowledge_table(await client.knowledge_base(), show_ids=True))
        elif action == "add":
            entry = await client.add_knowledge(args.question, args.answer)
            console.print(f"[green]✓ Entry added[/green] [dim]{entry['id']}[/dim]")
        else:
            console.print(f"[green]✓ {(await client.delete_knowledge(args.id))['message']}[/green]")

    elif resource == "student":
        if action == "ls":
            console.print(renderer.students_table(await client.students()))
        elif action == "add":
            password = args.password or Prompt.ask("Initial password", password=True)
            student = await client.create_student(args.full_name, args.university_id, password)
            console.print(f"[green]✓ Student created[/green] {student['fullName']} ({student['universityId']})")
        else:
            console.print(f"[green]✓ {(await client.delete_student(args.id))['message']}[/green]")

    return 0


async def run_command(
    args: argparse.Namespace,
    config: CLIConfig,
    console: Console,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Execute one subcommand; returns the process exit code"""
    if args.command == "login":
        university_id = args.university_id or Prompt.ask("University ID")
        password = Prompt.ask("Password", password=True)
        async with PortalClient(config, transport) as client:
            data = await client.login(university_id, password)
        config.save_to_file()
        console.print(f"\n[green]✓ Login successful![/green] Welcome, [bold]{data['user']['fullName']}[/bold]")
        return 0

    if args.command == "logout":
        config.clear_auth()
        config.save_to_file()
        console.print("[green]Logged out successfully[/green]")
        return 0

    if not config.is_authenticated:
        console.print("\n[red]✗ Authentication required[/red]")
        console.print("  [cyan]campus-portal login[/cyan]")
        return 1

    if args.command == "watch":
        from cli.watch import watch
        await watch(config, console, args.view, args.section_id)
        return 0

    async with PortalClient(config, transport) as client:
        if args.command == "admin":
            return await run_admin(args, client, config, console)
        if args.command == "whoami":
            console.print(renderer.user_panel(await client.me()))
        elif args.command == "sections":
            console.print(renderer.sections_table(await client.sections()))
        elif args.command == "files":
            console.print(renderer.files_table(await client.files(args.section_id), config.server_url))
        elif args.command == "news":
            console.print(renderer.news_panel(await client.news()))
        elif args.command == "search":
            results = await client.search(args.query)
            if results:
                console.print(renderer.knowledge_table(results, title=f"Results for \"{args.query}\""))
            else:
                console.print(f"[yellow]No answers found for \"{args.query}\"[/yellow]")
    return 0


def main():
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    console = Console()
    config = CLIConfig.load_default()
    if args.server_url:
        config.server_url = args.server_url
    if args.verbose:
        config.verbose = True

    try:
        sys.exit(asyncio.run(run_command(args, config, console)))
    except KeyboardInterrupt:
        print("\n\nGoodbye! 👋")
        sys.exit(0)
    except PortalClientError as e:
        renderer.print_error(console, e.message)
        if e.status_code == 401:
            console.print("Please login again: [cyan]campus-portal login[/cyan]")
        sys.exit(1)
    except ConnectionError as e:
        print(f"\n❌ Connection Error: {e}")
        sys.exit(1)
    except Exception as e:
        if config.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
