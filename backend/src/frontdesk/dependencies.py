"""Shared FastAPI dependencies.

Reusable type aliases and dependency functions that routers import.
Defined here (not in main.py) to avoid circular imports when routers
are registered in main.
"""

from typing import Annotated

import httpx
from fastapi import Depends

from frontdesk.gateway.session import get_backend

Backend = Annotated[httpx.AsyncClient, Depends(get_backend)]
