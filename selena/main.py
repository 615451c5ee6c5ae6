import argparse
import sys

from rich.text import Text

from . import __version__
from .client import SelenaAI
from .config import Config
from .core.errors import SelenaError
from .ui.interface import UI


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="selena",
        description="Command line interface for the Selena AI chat API",
    )
    parser.add_argument("--version", action="version", version=f"selena {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    ask = subparsers.add_parser("ask", help="Ask a single question")
    ask.add_argument("question", nargs="*", help="Question text (read from stdin when omitted)")
    ask.add_argument("-m", "--model", help=f"Model to use (default: {Config.DEFAULT_MODEL})")
    ask.add_argument("-s", "--stream", action="store_true", help="Print tokens as they arrive")
    ask.add_argument("-c", "--copy", action="store_true", help="Copy the answer to the clipboard")
    verbosity = ask.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Print only the answer")

    chat = subparsers.add_parser("chat", help="Start an interactive chat session")
    chat.add_argument("-m", "--model", help=f"Model to use (default: {Config.DEFAULT_MODEL})")

    config = subparsers.add_parser("config", help="Show or update the configuration")
    config.add_argument("--set-key", action="store_true", help="Prompt for an API key and save it to .env")

    return parser


def _log_level(args) -> str:
    if getattr(args, "verbose", False):
        return "debug"
    if getattr(args, "quiet", False):
        return "none"
    return Config.get_log_level()


def _read_question(args) -> str:
    if args.question:
        return " ".join(args.question)
    if not sys.stdin.isatty():
        return sys.stdin.read().strip()
    return ""


def cmd_ask(args, ui: UI) -> int:
    client = SelenaAI.from_env(logging=_log_level(args))
    question = _read_question(args)
    model = args.model or Config.get_model()

    if args.stream:
        def on_token(token: str):
            sys.stdout.write(token)
            sys.stdout.flush()

        result = client.chat.completions(message=question, model=model, stream=True, on_token=on_token)
        sys.stdout.write("\n")
    else:
        result = client.chat.completions(message=question, model=model)

    answer = str(result.get("response") or "")
    if not args.stream:
        if args.quiet:
            print(answer)
        else:
            ui.show_msg("Selena", Text(answer), "bright_magenta")

    if args.copy:
        ui.copy_to_clipboard(answer)
    return 0


def cmd_chat(args, ui: UI) -> int:
    client = SelenaAI.from_env()
    model = args.model or Config.get_model()
    ui.banner()

    while True:
        try:
            user_input = ui.get_input().strip()
        except KeyboardInterrupt:
            break
        if not user_input:
            continue
        if user_input.lower() in ("/exit", "/quit"):
            break

        try:
            ui.stream_markdown(
                "SELENA",
                lambda on_token: client.chat.completions(
                    message=user_input, model=model, stream=True, on_token=on_token
                ),
            )
        except (SelenaError, ValueError) as e:
            ui.show_error(e)

    ui.console.print("[dim]Session closed.[/]")
    return 0


def _mask(key: str) -> str:
    if not key:
        return "[red]not set[/]"
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}{'*' * (len(key) - 8)}{key[-4:]}"


def cmd_config(args, ui: UI) -> int:
    if args.set_key:
        key = ui.ask_secret(f"Enter your API key ({Config.DASHBOARD_URL})")
        if not key:
            ui.show_msg("Config", "No key entered, nothing saved.", "yellow")
            return 1
        path = Config.save_api_key(key)
        ui.show_msg("Config", Text(f"API key saved to {path}"), "green")

    ui.show_config({
        "API key": _mask(Config.get_api_key()),
        "Base URL": Config.get_base_url(),
        "Log level": Config.get_log_level(),
        "Model": Config.get_model(),
        "Version": __version__,
    })
    return 0


COMMANDS = {
    "ask": cmd_ask,
    "chat": cmd_chat,
    "config": cmd_config,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    ui = UI()
    try:
        return COMMANDS[args.command](args, ui)
    except (SelenaError, ValueError) as e:
        ui.show_error(e)
        return 1
    except KeyboardInterrupt:
        ui.console.print("\n[dim]Interrupted.[/]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
