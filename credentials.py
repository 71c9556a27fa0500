"""
Expedition Vlog Publisher — Google credentials
Loads the user OAuth tokens written by auth_setup.py.

Tokens can also come from env vars (CI): <PREFIX>_CLIENT_ID,
<PREFIX>_CLIENT_SECRET and <PREFIX>_REFRESH_TOKEN.
"""
import os
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

TOKEN_URI = "https://oauth2.googleapis.com/token"


def load_credentials(token_file: Path, scopes: list[str], env_prefix: str) -> Credentials:
    """Build user credentials, refreshing and re-saving them if expired."""
    creds = None

    # Try loading from token file first (local dev)
    if token_file.exists():
        creds = Credentials.from_authorized_user_file(str(token_file), scopes)

    # Try env-var refresh token (CI/CD)
    refresh_token = os.environ.get(f"{env_prefix}_REFRESH_TOKEN", "")
    if creds is None and refresh_token:
        creds = Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=TOKEN_URI,
            client_id=os.environ.get(f"{env_prefix}_CLIENT_ID", ""),
            client_secret=os.environ.get(f"{env_prefix}_CLIENT_SECRET", ""),
            scopes=scopes,
        )

    if creds is None:
        raise RuntimeError(
            f"No credentials found for {env_prefix.lower()}. Set {env_prefix}_CLIENT_ID, "
            f"{env_prefix}_CLIENT_SECRET, and {env_prefix}_REFRESH_TOKEN env vars, "
            f"or run auth_setup.py to create {token_file.name}."
        )

    # Refresh if expired
    if creds.expired or not creds.token:
        creds.refresh(Request())
        # Save refreshed token locally
        token_file.write_text(creds.to_json())

    return creds
