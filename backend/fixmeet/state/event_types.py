import re
from threading import Lock
from typing import Dict, List, Optional
from uuid import uuid4

from fixmeet.exceptions import NotFoundError
from fixmeet.schemas import EventTypeConfig, EventTypeCreate

_event_types: Dict[str, EventTypeConfig] = {}
_lock = Lock()


def _slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "event"


def save_event_type(payload: EventTypeCreate) -> EventTypeConfig:
    data = payload.model_dump()
    data["slug"] = payload.slug or _slugify(payload.title)
    config = EventTypeConfig(id=str(uuid4()), **data)
    with _lock:
        _event_types[config.id] = config
    return config


def get_event_type(event_type_id: str) -> Optional[EventTypeConfig]:
    with _lock:
        return _event_types.get(event_type_id)


def get_active_event_type(event_type_id: str) -> EventTypeConfig:
    config = get_event_type(event_type_id)
    if config is None or not config.is_active:
        raise NotFoundError(
            "Event type not found", details={"event_type_id": event_type_id}
        )
    return config


def list_event_types(host_id: Optional[str] = None, *, active_only: bool = False) -> List[EventTypeConfig]:
    with _lock:
        configs = list(_event_types.values())
    if host_id is not None:
        configs = [config for config in configs if config.host_id == host_id]
    if active_only:
        configs = [config for config in configs if config.is_active]
    return sorted(configs, key=lambda config: config.title)


def delete_event_type(event_type_id: str) -> bool:
    with _lock:
        return _event_types.pop(event_type_id, None) is not None


def clear_event_types() -> None:
    with _lock:
        _event_types.clear()
