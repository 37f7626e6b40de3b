"""Configuration management for Git Notes Reader."""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .errors import ConfigError

# Load .env file from project root
_project_root = Path(__file__).parent.parent
load_dotenv(_project_root / ".env")

GITHUB_MEDIA_TYPE = "application/vnd.github+json"


def _parse_timeout(raw: str) -> Optional[float]:
    """Parse GIT_NOTES_TIMEOUT; unset or empty means no timeout."""
    if not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"GIT_NOTES_TIMEOUT must be a number of seconds, got '{raw}'")
    if timeout <= 0:
        raise ConfigError(f"GIT_NOTES_TIMEOUT must be positive, got '{raw}'")
    return timeout


@dataclass(frozen=True)
class Config:
    """Application configuration."""
    
    # Repository coordinates
    owner: str
    repo: str
    notes_ref: str
    api_url: str
    
    # Optional settings with defaults
    token: Optional[str] = None
    request_timeout: Optional[float] = None  # seconds; None waits forever
    
    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # An empty token is treated as anonymous access
        token = os.getenv("GITHUB_TOKEN", "").strip() or None
        
        return cls(
            owner=os.getenv("GIT_NOTES_OWNER", "rbbydotdev"),
            repo=os.getenv("GIT_NOTES_REPO", "testrepo"),
            notes_ref=os.getenv("GIT_NOTES_REF", "notes/ai"),
            api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            token=token,
            request_timeout=_parse_timeout(os.getenv("GIT_NOTES_TIMEOUT", "")),
        )
    
    def with_overrides(
        self,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        notes_ref: Optional[str] = None,
        api_url: Optional[str] = None,
    ) -> "Config":
        """Return a copy with every non-None override applied."""
        changes = {
            "owner": owner,
            "repo": repo,
            "notes_ref": notes_ref,
            "api_url": api_url.rstrip("/") if api_url else None,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
    
    @property
    def authenticated(self) -> bool:
        """Check if a bearer token will be sent."""
        return bool(self.token)
    
    @property
    def repo_path(self) -> str:
        """API path prefix for the configured repository."""
        return f"/repos/{self.owner}/{self.repo}"
    
    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {"Accept": GITHUB_MEDIA_TYPE}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers
