#!/usr/bin/env python3
"""
Entry point for cartsync

Prints the current cart of an identity (optional first argument) followed by
the merged all-carts listing.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from cartsync.application.dtos.cart_dtos import CartOperationResponse
from cartsync.infrastructure.configuration.config import get_config
from cartsync.infrastructure.container.dependency_injection import DependencyContainer
from cartsync.infrastructure.identity.session_identity_provider import SessionIdentityProvider
from cartsync.infrastructure.logging.logging_config import setup_logging


def _print_response(title: str, response: CartOperationResponse) -> None:
    print(f"== {title} ==")
    if not response.success:
        print(f"❌ {response.error_code}: {response.error_message}")
        return
    if response.listing is not None:
        listing = response.listing
        if not listing.remote_available:
            print(f"⚠️ Remote carts unavailable: {listing.remote_error}")
        for cart in listing.carts:
            print(f"  [{cart.source.value}] {cart}")
        print(f"  {len(listing.carts)} carts (local={listing.local_count}, remote={listing.remote_count})")
    elif response.cart is not None:
        print(f"  {response.cart}")
        for item in response.cart.items:
            print(f"    {item.quantity} x {item.title or item.product_id} @ {item.unit_price} = {item.line_total}")
    else:
        print("  (empty)")


async def run(identity: int = None) -> None:
    config = get_config()
    container = DependencyContainer(config)
    await container.initialize()
    commands = container.get_cart_commands()
    try:
        if identity is not None:
            session = container.new_session()
            provider = SessionIdentityProvider()
            container.bind_session(provider, session)
            await provider.login(identity)
            _print_response(f"Cart for identity {identity}", await commands.refresh(session))
        _print_response("All carts", await commands.list_all())
    finally:
        await container.aclose()


def main() -> None:
    setup_logging()
    identity = int(sys.argv[1]) if len(sys.argv) > 1 else None
    logging.getLogger(__name__).info("Starting cartsync (identity=%s)", identity)
    asyncio.run(run(identity))


if __name__ == "__main__":
    main()
