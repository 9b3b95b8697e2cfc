from __future__ import annotations

from datetime import tzinfo
from typing import List, Sequence

from fixmeet.schemas.availability import SlotDisplay
from fixmeet.services.slots import CandidateSlot
from fixmeet.services.timeutils import format_clock


def present_slots(slots: Sequence[CandidateSlot], requester_tz: tzinfo) -> List[SlotDisplay]:
    """Render slots in the requester's zone; order and count are unchanged."""
    rendered: List[SlotDisplay] = []
    for slot in slots:
        local_start = slot.start.astimezone(requester_tz)
        local_end = slot.end.astimezone(requester_tz)
        rendered.append(
            SlotDisplay(
                start=local_start,
                end=local_end,
                start_display=format_clock(local_start),
                end_display=format_clock(local_end),
            )
        )
    return rendered
