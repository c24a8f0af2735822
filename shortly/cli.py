"""
Command-line interface for the Shortly client.

Usage:
    shortly shorten <url> [--login] [--token TOKEN]
    shortly history
    shortly serve
"""

import argparse
import asyncio
import getpass
import json
import sys
from typing import Optional, Tuple

from .client import ShortlyClient
from .config import ClientConfig, load_config
from .identity import FirebaseIdentityProvider
from .models import Success
from .verification import PromptVerificationWidget
from .common.logging_config import setup_logging


async def prompt_credentials() -> Tuple[str, str]:
    """Read email and password from the terminal."""
    email = await asyncio.to_thread(input, "Email: ")
    password = await asyncio.to_thread(getpass.getpass, "Password: ")
    return email.strip(), password


def make_token_prompt(preset: Optional[str] = None):
    """Token prompt that hands out ``preset`` once, then asks the terminal."""
    remaining = [preset] if preset else []

    async def prompt(site_key: str) -> str:
        if remaining:
            return remaining.pop()
        return await asyncio.to_thread(
            input, f"Complete the CAPTCHA for site key {site_key} and paste the token: "
        )

    return prompt


class ShortlyCLI:
    """Command-line front end for ``ShortlyClient``."""

    def __init__(self, config: ClientConfig, token: Optional[str] = None, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(
            level="DEBUG" if verbose else config.log_level,
            log_file=config.log_file,
            json_format=config.log_json,
        )
        self.provider = FirebaseIdentityProvider(
            api_key=config.firebase_api_key or "",
            prompt=prompt_credentials,
            timeout=config.request_timeout,
            logger=self.logger,
        )
        self.widget = PromptVerificationWidget(config.widget_site_key, make_token_prompt(token))
        self.client = ShortlyClient(config, self.provider, self.widget, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        await self.client.close()
        await self.provider.close()

    async def login(self) -> bool:
        if not self.config.firebase_api_key:
            self._fail("SHORTLY_FIREBASE_API_KEY is not configured")
            return False
        if not await self.client.login():
            self._fail(self.client.state.error_message)
            return False
        return True

    async def shorten(self, url: str, login: bool = False) -> int:
        """Shorten a URL, optionally as a signed-in user."""
        if login and not await self.login():
            return 1

        if not await self.client.verify():
            self._fail(self.client.state.error_message)
            return 1

        result = await self.client.shorten(url)
        state = self.client.state

        if isinstance(result, Success):
            print(json.dumps({
                "success": True,
                "source_url": url,
                "short_url": result.short_url,
                "history": [entry.link(self.config.backend_base_url) for entry in state.history],
            }, indent=2))
            return 0

        self._fail(state.error_message)
        return 1

    async def history(self) -> int:
        """Sign in and list the user's short URLs."""
        if not await self.login():
            return 1

        state = self.client.state
        if state.error_message:
            self._fail(state.error_message)
            return 1

        print(json.dumps({
            "success": True,
            "email": state.identity.email,
            "count": len(state.history),
            "urls": [
                {
                    "original_url": entry.original_url,
                    "short_url": entry.link(self.config.backend_base_url),
                }
                for entry in state.history
            ],
        }, indent=2))
        return 0

    def _fail(self, message: str) -> None:
        self.logger.debug(f"Client state: {self.client.state.to_dict()}")
        print(json.dumps({
            "success": False,
            "error": message,
        }, indent=2), file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortly",
        description="Shortly URL shortener client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL anonymously
  %(prog)s shorten https://example.com/long/url

  # Shorten as a signed-in user (keeps history)
  %(prog)s shorten https://example.com/long/url --login

  # List your short URLs
  %(prog)s history

  # Run the redirect app
  %(prog)s serve
        """
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--login", action="store_true", help="Sign in first so the URL is kept in history")
    shorten_parser.add_argument("--token", help="Verification token (prompted for if omitted)")

    subparsers.add_parser("history", help="Sign in and list your short URLs")
    subparsers.add_parser("serve", help="Run the redirect app")

    return parser


async def main(args) -> int:
    """Run a client command."""
    config = load_config()
    cli = ShortlyCLI(config, token=getattr(args, "token", None), verbose=args.verbose)
    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, login=args.login)
        elif args.command == "history":
            return await cli.history()
        return 1
    finally:
        await cli.cleanup()


def run(argv=None):
    """Console entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from app import serve
        serve(load_config())
        sys.exit(0)

    sys.exit(asyncio.run(main(args)))


if __name__ == "__main__":
    run()
