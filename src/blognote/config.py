from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    jwt_secret_key: str  # Signs session tokens, must be kept out of source control
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 60 * 60  # Session token lifetime, 1 hour
    bcrypt_rounds: int = 12
    posts_per_page: int = 2
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BLOGNOTE_",
        "extra": "ignore",
    }
