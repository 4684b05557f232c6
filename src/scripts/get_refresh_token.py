#!/usr/bin/env python3
"""
Obtain a Google refresh token for read-only calendar access.

Runs the OAuth consent flow in the browser with a local callback server and
prints the GOOGLE_REFRESH_TOKEN line to add to .env.

Usage:
    python src/scripts/get_refresh_token.py [--port 3000]
"""

import argparse
import os
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from google_auth_oauthlib.flow import InstalledAppFlow

from core.config import GOOGLE_CALENDAR_SCOPE, GOOGLE_TOKEN_URL


def main():
    parser = argparse.ArgumentParser(description="Get a Google Calendar refresh token")
    parser.add_argument("--port", type=int, default=3000, help="Local callback port")
    args = parser.parse_args()

    client_id = os.environ.get("GOOGLE_CLIENT_ID", "")
    client_secret = os.environ.get("GOOGLE_CLIENT_SECRET", "")
    if not client_id or not client_secret:
        print("Error: GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set in .env")
        sys.exit(1)

    client_config = {
        "installed": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": "https://accounts.google.com/o/oauth2/v2/auth",
            "token_uri": GOOGLE_TOKEN_URL,
            "redirect_uris": [f"http://localhost:{args.port}/"],
        }
    }
    flow = InstalledAppFlow.from_client_config(client_config, [GOOGLE_CALENDAR_SCOPE])

    # prompt=consent makes Google return a refresh token every time
    creds = flow.run_local_server(port=args.port, access_type="offline", prompt="consent")

    if not creds.refresh_token:
        print("No refresh token received. Revoke the app's access and try again.")
        sys.exit(1)

    print("\nAdd this to your .env file:")
    print(f"GOOGLE_REFRESH_TOKEN={creds.refresh_token}\n")


if __name__ == "__main__":
    main()
