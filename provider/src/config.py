from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    buildkite_api_url: str = "https://api.buildkite.com/v2"
    buildkite_organization: str = ""
    buildkite_api_token: str = ""
    request_timeout: float = 30.0  # seconds
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
