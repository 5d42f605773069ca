# kbpages/core/dependencies.py
"""Shared FastAPI dependencies: log database session and SharePoint gateway."""

from typing import Annotated, AsyncIterator, Dict

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from kbpages.core import config
from kbpages.core.database import get_db
from kbpages.pages.dao import SharePointGateway

SessionDep = Annotated[Session, Depends(get_db)]


def _auth_headers() -> Dict[str, str]:
    if config.SHAREPOINT_ACCESS_TOKEN:
        return {"Authorization": f"Bearer {config.SHAREPOINT_ACCESS_TOKEN}"}
    return {}


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One HTTP client per request; timeouts are enforced here, not by the gateway."""
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS, headers=_auth_headers()) as client:
        yield client


HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_gateway(client: HttpClientDep) -> SharePointGateway:
    return SharePointGateway(client)


GatewayDep = Annotated[SharePointGateway, Depends(get_gateway)]
