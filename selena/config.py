import os
from pathlib import Path

from dotenv import load_dotenv, set_key


class Config:
    """Environment-driven settings shared by the SDK and the CLI."""

    API_KEY_ENV = "SELENA_API_KEY"
    BASE_URL_ENV = "SELENA_BASE_URL"
    LOG_LEVEL_ENV = "SELENA_LOG_LEVEL"
    MODEL_ENV = "SELENA_MODEL"

    DEFAULT_BASE_URL = "https://elaxi.xyz"
    DEFAULT_LOG_LEVEL = "none"
    DEFAULT_MODEL = "selena-pro-v1"
    DASHBOARD_URL = "https://elaxi.xyz/dashboard"

    ENV_FILE = ".env"
    CODE_THEME = "monokai"

    _env_loaded = False

    @classmethod
    def load_env(cls, force: bool = False):
        """Load the .env file once. Real environment variables win."""
        if cls._env_loaded and not force:
            return
        load_dotenv(cls.ENV_FILE, override=False)
        cls._env_loaded = True

    @classmethod
    def get_api_key(cls) -> str:
        cls.load_env()
        return os.environ.get(cls.API_KEY_ENV, "")

    @classmethod
    def get_base_url(cls) -> str:
        cls.load_env()
        return os.environ.get(cls.BASE_URL_ENV) or cls.DEFAULT_BASE_URL

    @classmethod
    def get_log_level(cls) -> str:
        cls.load_env()
        return (os.environ.get(cls.LOG_LEVEL_ENV) or cls.DEFAULT_LOG_LEVEL).lower()

    @classmethod
    def get_model(cls) -> str:
        cls.load_env()
        return os.environ.get(cls.MODEL_ENV) or cls.DEFAULT_MODEL

    @classmethod
    def save_api_key(cls, api_key: str) -> str:
        """Persist the key to the .env file and the current environment."""
        Path(cls.ENV_FILE).touch(exist_ok=True)
        set_key(cls.ENV_FILE, cls.API_KEY_ENV, api_key)
        os.environ[cls.API_KEY_ENV] = api_key
        return os.path.abspath(cls.ENV_FILE)
