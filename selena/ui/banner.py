from rich.text import Text
from rich.align import Align

from .. import __version__


class Banner:
    @staticmethod
    def get_ascii_art():
        return """
[bold bright_magenta]███████╗███████╗██╗     ███████╗███╗   ██╗ █████╗ [/]
[bold bright_magenta]██╔════╝██╔════╝██║     ██╔════╝████╗  ██║██╔══██╗[/]
[bold magenta]███████╗█████╗  ██║     █████╗  ██╔██╗ ██║███████║[/]
[bold magenta]╚════██║██╔══╝  ██║     ██╔══╝  ██║╚██╗██║██╔══██║[/]
[bold bright_blue]███████║███████╗███████╗███████╗██║ ╚████║██║  ██║[/]
[bold bright_blue]╚══════╝╚══════╝╚══════╝╚══════╝╚═╝  ╚═══╝╚═╝  ╚═╝[/]
        """

    @staticmethod
    def print_banner(console):
        tagline = Text(f"Selena AI SDK | v{__version__}", style="bold bright_cyan")
        subline = Text("Type /exit to leave", style="italic dim")

        console.print(Align.center(Banner.get_ascii_art()))
        console.print(Align.center(tagline))
        console.print(Align.center(subline))
        console.print(Align.center(Text("━" * 50, style="dim cyan")))
        console.print("")
