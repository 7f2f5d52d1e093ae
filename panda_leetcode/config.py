"""Service configuration — upstream endpoints, cache window and telemetry knobs."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "PANDA_"}

    # Upstream data source
    github_api_url: str = "https://api.github.com"
    raw_content_url: str = "https://raw.githubusercontent.com"
    upstream_repo: str = "liquidslr/leetcode-company-wise-problems"
    upstream_branch: str = "main"
    user_agent: str = "company-leetcode-app"

    # Upstream HTTP behaviour
    directory_revalidate_seconds: int = Field(86400, ge=0)
    http_timeout_seconds: float = Field(15.0, gt=0)

    # Table view
    page_size: int = Field(20, gt=0)

    # Observability
    otlp_endpoint: str = ""
    environment: str = "development"
    trace_sample_ratio: float = Field(1.0, ge=0, le=1)
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
