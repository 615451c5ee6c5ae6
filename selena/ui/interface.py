from typing import Callable

import pwinput
import pyperclip
from rich.console import Console, RenderableType
from rich.live import Live
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel
from rich.rule import Rule
from rich.spinner import Spinner
from rich.table import Table

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.styles import Style

from ..config import Config
from ..core.errors import SelenaError
from ..core.models import ChatResponse
from .banner import Banner


class UI:
    """Terminal user interface using Rich"""

    HISTORY_FILE = ".selena_history"

    def __init__(self, console: Console = None):
        self.console = console or Console()
        self.pt_style = Style.from_dict({
            'prompt': 'ansimagenta bold',
        })
        self._session = None

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession(history=FileHistory(self.HISTORY_FILE))
        return self._session

    def banner(self):
        Banner.print_banner(self.console)

    def show_msg(self, title: str, content: RenderableType, color: str = "white"):
        self.console.print(Panel(content, title=f"[bold]{title}[/]", border_style=color, padding=(1, 2)))

    def show_error(self, error: Exception):
        """Render an exception, with kind and status for SDK errors."""
        if isinstance(error, SelenaError):
            details = [f"[bold]{escape(error.message)}[/]", f"[dim]kind: {error.kind.value}[/]"]
            if error.status:
                details.append(f"[dim]status: {error.status}[/]")
            if error.field:
                details.append(f"[dim]field: {escape(error.field)}[/]")
            self.show_msg(error.__class__.__name__, "\n".join(details), "red")
        else:
            self.show_msg("Error", escape(str(error)), "red")

    def show_config(self, info: dict):
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="bold cyan", justify="right")
        table.add_column("Value", style="bold bright_white")
        for key, value in info.items():
            table.add_row(key, str(value))
        self.console.print(Panel(table, title="[bold cyan]Selena Configuration[/]", border_style="bright_blue", padding=(1, 2)))

    def get_input(self, label: str = "YOU") -> str:
        try:
            self.console.print(f"[bold bright_magenta]◆ {label}[/]")
            return self.session.prompt([('class:prompt', ' ╰─> ')], style=self.pt_style)
        except KeyboardInterrupt:
            raise
        except EOFError:
            return "/exit"

    def ask_secret(self, label: str) -> str:
        return pwinput.pwinput(prompt=f"{label}: ", mask="*").strip()

    def stream_markdown(self, title: str, run: Callable[[Callable[[str], None]], ChatResponse]) -> str:
        """
        Renders Markdown as tokens arrive. ``run`` receives the token callback
        and returns the final response.
        """
        full_response = ""
        self.console.print(Rule(f"[bold bright_cyan]{title}[/bold bright_cyan]", style="bright_blue"))

        with Live(
            Spinner("dots", text="Waiting for Selena...", style="bright_cyan"),
            console=self.console,
            refresh_per_second=15,
            transient=True
        ) as live:

            def on_token(token: str):
                nonlocal full_response
                full_response += token
                live.update(Markdown(full_response, code_theme=Config.CODE_THEME))

            result = run(on_token)

        if isinstance(result, ChatResponse) and result.response:
            final_response = str(result.response)
        else:
            final_response = full_response.strip()

        if not final_response:
            self.console.print("[bold red]✗ Empty response received.[/]")
        else:
            self.console.print(Markdown(final_response, code_theme=Config.CODE_THEME))
        self.console.print(Rule(style="dim bright_blue"))
        return final_response

    def copy_to_clipboard(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException:
            self.console.print("[bold red]✗ Clipboard failed. Please install xclip/xsel (Linux).[/]")
            return False
        self.console.print(f"[bold green]✓ Answer copied to clipboard! ({len(text)} characters)[/]")
        return True
