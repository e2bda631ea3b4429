"""Room and deal catalog access.

Pure fetch functions. Each takes the backend client and returns domain models.
"""

import httpx

from frontdesk.models import Deal, RoomRateProfile
from frontdesk.repositories.backend import parse, parse_list, request_json
from frontdesk.schemas.backend import DealRecord, RoomRecord


async def list_rooms(backend: httpx.AsyncClient) -> list[RoomRateProfile]:
    data = await request_json(backend, "GET", "/api/rooms", entity="Room")
    return [record.to_domain() for record in parse_list(RoomRecord, data, "Room")]


async def get_room(backend: httpx.AsyncClient, room_id: str) -> RoomRateProfile:
    data = await request_json(backend, "GET", f"/api/rooms/{room_id}", entity="Room", identifier=room_id)
    return parse(RoomRecord, data, "Room").to_domain()


async def list_deals(backend: httpx.AsyncClient) -> list[Deal]:
    """Return the whole deal catalog; applicability is decided by the matcher."""
    data = await request_json(backend, "GET", "/api/deals", entity="Deal")
    return [record.to_domain() for record in parse_list(DealRecord, data, "Deal")]
