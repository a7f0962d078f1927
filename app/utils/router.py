from typing import Optional

from fastapi import APIRouter

from app.core.config import settings


def get_router(prefix: str, tag: Optional[str] = None):
    """
    Shared APIRouter factory.

    Args:
        prefix (str): path under the API prefix (e.g. "clients", "auth")
        tag (str): OpenAPI tag, defaults to the prefix

    Returns:
        APIRouter: router mounted at /api/{prefix}
    """
    base_prefix = settings.API_PREFIX.rstrip("/")

    prefix = prefix.strip("/").lower()
    full_prefix = f"{base_prefix}/{prefix}" if prefix else base_prefix

    return APIRouter(prefix=full_prefix, tags=[tag or prefix or "api"])
