from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import APIRouter, Header, Query, Response

from voice_gateway.api.deps import ClockDep, ConfigDep, UoWDep
from voice_gateway.api.v1.schemas.room_metadata import RoomMetadataResponse
from voice_gateway.application.exceptions import AuthenticationFailed, ValidationError
from voice_gateway.config import IssuanceConfig
from voice_gateway.domain.value_objects.room import is_valid_room_name
from voice_gateway.services import session_service

router = APIRouter(prefix="/api", tags=["room-metadata"])


def _check_api_key(config: IssuanceConfig, provided: str | None) -> None:
    expected = config.metadata_api_key
    if not expected or not provided:
        raise AuthenticationFailed("Unauthorized")
    if not hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8")):
        raise AuthenticationFailed("Unauthorized")


@router.get(
    "/room-metadata",
    response_model=RoomMetadataResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
)
async def room_metadata(
    response: Response,
    config: ConfigDep,
    uow: UoWDep,
    clock: ClockDep,
    room: Annotated[str | None, Query()] = None,
    x_api_key: Annotated[str | None, Header()] = None,
) -> RoomMetadataResponse:
    _check_api_key(config, x_api_key)
    if not room:
        raise ValidationError("missing room param")
    if not is_valid_room_name(room):
        raise ValidationError("Invalid room name")

    response.headers["Cache-Control"] = "no-store"
    record = await session_service.get_session_by_room(room, uow, clock)
    if record is None:
        return RoomMetadataResponse(found=False)
    return RoomMetadataResponse(
        found=True,
        metadata=record.metadata,
        session_id=record.session_id,
        uid=record.uid,
    )
