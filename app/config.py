"""TRIDASH — Central Configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Identity (Copilot / Assembly) ──
    copilot_api_key: str = ""
    copilot_base_url: str = "https://api.copilot.com"
    copilot_token_path: str = "/v1/sessions/token-payload"

    # ── GA4 Data API ──
    ga4_access_token: str = ""
    ga4_base_url: str = "https://analyticsdata.googleapis.com/v1beta"

    # ── Google Ads API ──
    google_ads_access_token: str = ""
    google_ads_developer_token: str = ""
    google_ads_login_customer_id: Optional[str] = None
    google_ads_api_version: str = "v17"
    google_ads_base_url: str = "https://googleads.googleapis.com"

    # ── Metricool API ──
    metricool_api_token: str = ""
    metricool_user_id: str = ""
    metricool_base_url: str = "https://app.metricool.com/api"
    metricool_posts_limit: int = 10

    # ── Timeouts ──
    provider_timeout_seconds: float = 30.0  # per HTTP call
    request_timeout_seconds: Optional[float] = 60.0  # whole panel request

    # ── Tenancy ──
    account_mapping_file: Optional[str] = None  # see accounts.example.json

    # ── App ──
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
