import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from fixmeet.schemas import EventTypeConfig, EventTypeCreate
from fixmeet.state.event_types import (
    delete_event_type,
    get_event_type,
    list_event_types,
    save_event_type,
)

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("", response_model=EventTypeConfig, status_code=status.HTTP_201_CREATED)
def create_event_type(payload: EventTypeCreate) -> EventTypeConfig:
    config = save_event_type(payload)
    logger.info("Created event type %s (%s) for host %s", config.id, config.slug, config.host_id)
    return config


@router.get("", response_model=List[EventTypeConfig])
def read_event_types(
    host_id: Optional[str] = Query(default=None, alias="hostId"),
    active_only: bool = Query(default=False, alias="activeOnly"),
) -> List[EventTypeConfig]:
    return list_event_types(host_id, active_only=active_only)


@router.get("/{event_type_id}", response_model=EventTypeConfig)
def read_event_type(event_type_id: str) -> EventTypeConfig:
    config = get_event_type(event_type_id)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event type not found",
        )
    return config


@router.delete("/{event_type_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event_type(event_type_id: str) -> None:
    if not delete_event_type(event_type_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event type not found",
        )
    logger.info("Deleted event type %s", event_type_id)
