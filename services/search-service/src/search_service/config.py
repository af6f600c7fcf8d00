from __future__ import annotations

import os
from dataclasses import dataclass


def _env_str(name: str, default: str = "") -> str:
    return os.getenv(name) or default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    app_env: str = _env_str("APP_ENV", "development")

    # Static bearer secret shared with the display shell; empty disables the check.
    service_token: str = _env_str("SEARCH_SERVICE_TOKEN")

    provider_timeout_seconds: float = _env_float("PROVIDER_TIMEOUT_SECONDS", 20.0)
    results_per_provider: int = _env_int("RESULTS_PER_PROVIDER", 10)
    trends_geo: str = _env_str("TRENDS_GEO", "US")

    serpapi_key: str = _env_str("SERPAPI_KEY")
    google_books_key: str = _env_str("GOOGLE_BOOKS_KEY")
    loc_api_key: str = _env_str("LOC_API_KEY")
    ncbi_api_key: str = _env_str("NCBI_API_KEY")
    sciencegov_api_key: str = _env_str("SCIENCEGOV_API_KEY")
    reddit_client_id: str = _env_str("REDDIT_CLIENT_ID")
    reddit_client_secret: str = _env_str("REDDIT_CLIENT_SECRET")
    reddit_user_agent: str = _env_str("REDDIT_USER_AGENT", "ExusResearch/1.0")
    jstor_api_key: str = _env_str("JSTOR_API_KEY")

    arxiv_base_url: str = _env_str("ARXIV_BASE_URL", "http://export.arxiv.org/api")
    pubmed_base_url: str = _env_str(
        "PUBMED_BASE_URL", "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
    )
    loc_base_url: str = _env_str("LOC_BASE_URL", "https://www.loc.gov")
    researchgate_base_url: str = _env_str("RESEARCHGATE_BASE_URL", "https://www.researchgate.net")
    wikipedia_base_url: str = _env_str("WIKIPEDIA_BASE_URL", "https://en.wikipedia.org")
    serpapi_base_url: str = _env_str("SERPAPI_BASE_URL", "https://serpapi.com")
    google_books_base_url: str = _env_str(
        "GOOGLE_BOOKS_BASE_URL", "https://www.googleapis.com/books/v1"
    )
    digital_commons_base_url: str = _env_str(
        "DIGITAL_COMMONS_BASE_URL", "https://network.bepress.com"
    )
    reddit_auth_url: str = _env_str("REDDIT_AUTH_URL", "https://www.reddit.com")
    reddit_base_url: str = _env_str("REDDIT_BASE_URL", "https://oauth.reddit.com")
    sciencegov_base_url: str = _env_str("SCIENCEGOV_BASE_URL", "https://www.science.gov")
    jstor_base_url: str = _env_str("JSTOR_BASE_URL", "https://www.jstor.org")
