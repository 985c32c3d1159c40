from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

DEFAULT_TIMEOUT = 10.0


@asynccontextmanager
async def get_http_client(
    timeout: float = DEFAULT_TIMEOUT,
    client: Optional[httpx.AsyncClient] = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """
    Provide a configured HTTPX async client.

    When ``client`` is given it is yielded as-is and left open for its owner.
    """
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
