"""Mock identity provider.

Accepts any non-empty credentials after a short simulated delay. The id is
derived from the email so the same person always gets the same favorites.
"""

import asyncio
import re

from config import settings
from models.identity import Identity


class AuthError(Exception):
    pass


def identity_id_for(email: str) -> str:
    return "user_" + re.sub(r"[^a-z0-9]", "_", email.lower())


async def login_user(email: str, password: str) -> Identity:
    if not email or not password:
        raise AuthError("Email and password are required")
    await asyncio.sleep(settings.auth_latency_ms / 1000)
    return Identity(id=identity_id_for(email), email=email, name=email.split("@")[0])


async def register_user(email: str, password: str, name: str) -> Identity:
    if not email or not password or not name:
        raise AuthError("All fields are required")
    await asyncio.sleep(settings.auth_latency_ms / 1000)
    return Identity(id=identity_id_for(email), email=email, name=name)
