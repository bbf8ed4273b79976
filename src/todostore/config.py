from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    data_path: str = "data"  # Directory holding one JSON file per todo
    counter_path: str = "counter.txt"  # File holding the last allocated id
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    static_path: str | None = None  # Directory served at "/" (optional)

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TODOSTORE_",
        "extra": "ignore",
    }
