from enum import Enum
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = Path(__file__).parent / "app" / "templates"
    openai_api_key: SecretStr = SecretStr("")
    openai_base_url: str | None = None
    core_model: str = "gpt-4-turbo-preview"
    max_tokens: int = 1024
    min_ingredients: int = 4
    request_timeout: float = 60 * 2
    session_cookie: str = "chef-session"
    max_kitchens: int = 1000
