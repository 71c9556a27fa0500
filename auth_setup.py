"""
Expedition Vlog Publisher — Google OAuth Setup (run once locally)

This script performs the one-time OAuth 2.0 flow for YouTube and Google
Drive and saves the tokens the pipeline uses. Run this on your local
machine with a browser. For CI, copy the printed refresh tokens to the
YOUTUBE_* and DRIVE_* secrets.

Prerequisites:
  1. Create a project in Google Cloud Console
  2. Enable the YouTube Data API v3 and the Drive API
  3. Create OAuth 2.0 credentials (Desktop app)
  4. Download the client secrets to ~/.credentials/youtube_secret.json
     and ~/.credentials/drive_secret.json

Usage:
  python auth_setup.py [youtube|drive]
"""
import json
import sys

from google_auth_oauthlib.flow import InstalledAppFlow

from config import (
    YOUTUBE_CLIENT_SECRETS_FILE, DRIVE_CLIENT_SECRETS_FILE, YOUTUBE_TOKEN_FILE,
    DRIVE_TOKEN_FILE, YOUTUBE_SCOPES, DRIVE_SCOPES,
)

SERVICES = {
    "youtube": (YOUTUBE_CLIENT_SECRETS_FILE, YOUTUBE_TOKEN_FILE, YOUTUBE_SCOPES),
    "drive": (DRIVE_CLIENT_SECRETS_FILE, DRIVE_TOKEN_FILE, DRIVE_SCOPES),
}


def authorize(name: str) -> bool:
    secrets_file, token_file, scopes = SERVICES[name]
    if not secrets_file.exists():
        print(f"ERROR: {secrets_file} not found.")
        print("Download it from Google Cloud Console → APIs → Credentials")
        return False

    flow = InstalledAppFlow.from_client_secrets_file(str(secrets_file), scopes=scopes)
    credentials = flow.run_local_server(port=8080, prompt="consent")

    # Save full token
    token_file.write_text(credentials.to_json())
    print(f"\nToken saved to: {token_file}")

    # Extract values for CI/CD
    token_data = json.loads(credentials.to_json())
    prefix = name.upper()
    print("\n" + "=" * 60)
    print("Add these to your CI secrets:")
    print("=" * 60)
    print(f"{prefix}_CLIENT_ID = {token_data.get('client_id', 'N/A')}")
    print(f"{prefix}_CLIENT_SECRET = {token_data.get('client_secret', 'N/A')}")
    print(f"{prefix}_REFRESH_TOKEN = {token_data.get('refresh_token', 'N/A')}")
    print("=" * 60)
    return True


def main():
    names = sys.argv[1:] or list(SERVICES)
    for name in names:
        if name not in SERVICES:
            print(f"Unknown service {name!r}. Choose from: {', '.join(SERVICES)}")
            sys.exit(1)
        if not authorize(name):
            sys.exit(1)


if __name__ == "__main__":
    main()
