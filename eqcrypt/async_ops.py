"""
Async Hash Operations
=====================
Event-loop friendly wrappers around the engine.

Argon2id (~64 MiB) and scrypt (~16 MiB) block for a noticeable time, so
these run the work in the loop's default thread pool executor.
"""

import asyncio
from functools import partial
from typing import Optional

from .engine import HashEngine, get_default_engine
from .models import VerifyResult


async def generate_async(
    username: str,
    password: str,
    mode: int,
    engine: Optional[HashEngine] = None,
) -> str:
    """
    Generate a hash without blocking the event loop.

    Args:
        username: Account name
        password: Plain text password
        mode: Encryption mode 1-14
        engine: Engine to use (defaults to the cached engine)

    Returns:
        Hash text
    """
    engine = engine or get_default_engine()
    loop = asyncio.get_running_loop()

    # Run in executor to avoid blocking the event loop
    return await loop.run_in_executor(None, partial(engine.generate, username, password, mode))


async def identify_and_verify_async(
    stored_hash: str,
    password: str,
    engine: Optional[HashEngine] = None,
) -> VerifyResult:
    """Verify by prefix without blocking the event loop."""
    engine = engine or get_default_engine()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, engine.identify_and_verify, stored_hash, password)


async def verify_async(
    stored_hash: str,
    password: str,
    engine: Optional[HashEngine] = None,
) -> bool:
    """Boolean verify without blocking the event loop."""
    engine = engine or get_default_engine()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, engine.verify, stored_hash, password)
