#!/usr/bin/env python3
"""
Mint a development bearer token for the Conference Central API.

The token is signed with ``SECRET_KEY`` from the environment, so run
this with the same environment as the server.

Usage:
    python create_token.py --user-id 1234 --email lemoncake@example.com
    python create_token.py --user-id 1234 --email lemoncake@example.com --client-id web-client --days 365
"""

import argparse

from conference_central_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a bearer token for the Conference Central API.")
    ap.add_argument("--user-id", required=True, help="Opaque user id, becomes the token subject")
    ap.add_argument("--email", required=True, help="E-mail address of the user")
    ap.add_argument("--client-id", help="OAuth client id to put in the azp claim")
    ap.add_argument("--scope", help="Space-separated granted scopes; omit to trust the e-mail as is")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    args = ap.parse_args()

    claims = {"sub": args.user_id, "email": args.email}
    if args.client_id:
        claims["azp"] = args.client_id
    if args.scope:
        claims["scope"] = args.scope
    print(create_access_token(claims, expires_delta=args.days * 24 * 60 * 60))


if __name__ == "__main__":
    main()
