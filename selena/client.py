from rich.console import Console

from . import __version__
from .config import Config
from .core.chat import ChatAPI
from .core.errors import ValidationError
from .core.logger import Logger
from .core.transport import HTTPTransport

DEFAULT_BASE_URL = Config.DEFAULT_BASE_URL


class SelenaAI:
    """
    Main Selena AI client.

    Usage:
        client = SelenaAI(api_key="sk-...")

        response = client.chat.completions(message="Hello!")
        print(response.response)

        # Streaming
        client.chat.completions(
            message="Tell me a story",
            stream=True,
            on_token=lambda token: print(token, end="", flush=True),
        )
    """

    def __init__(
        self,
        api_key: str = None,
        base_url: str = None,
        logging: str = "none",
        console: Console = None,
    ):
        if not api_key:
            raise ValidationError(
                f"API key is required. Get yours at {Config.DASHBOARD_URL}",
                "apiKey",
            )
        if not isinstance(api_key, str):
            raise ValidationError("API key must be a string", "apiKey")

        self.api_key = api_key
        self.base_url = base_url or DEFAULT_BASE_URL
        self._console = console

        self._build(logging or "none")
        self.logger.info("Selena AI client initialized", {
            "baseURL": self.base_url,
            "logLevel": self.logger.level,
        })

    @classmethod
    def from_env(cls, **overrides) -> "SelenaAI":
        """Build a client from SELENA_* environment variables (and .env)."""
        params = {
            "api_key": Config.get_api_key(),
            "base_url": Config.get_base_url(),
            "logging": Config.get_log_level(),
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)

    def _build(self, level: str):
        # An invalid level raises before anything is replaced.
        logger = Logger(level, console=self._console)
        transport = HTTPTransport(
            base_url=self.base_url,
            api_key=self.api_key,
            logger=logger if logger.enabled else None,
        )
        chat = ChatAPI(transport, logger)

        self.logger = logger
        self._transport = transport
        self.chat = chat

    def set_log_level(self, level: str):
        """Replace logger, transport and chat with ones built for ``level``."""
        self._build(level)
        self.logger.info("Log level updated", {"newLevel": level})

    def get_info(self) -> dict:
        return {
            "base_url": self.base_url,
            "log_level": self.logger.level,
            "version": __version__,
        }

    def __repr__(self):
        return f"SelenaAI(base_url={self.base_url!r}, log_level={self.logger.level!r})"
