from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Tuple

from google import genai
from google.genai import types

from fixmeet.prompts import load_prompt
from fixmeet.schemas import SlotDisplay
from fixmeet.schemas.recommendations import (
    RecommendationOption,
    RecommendationRequest,
    RecommendationResponse,
)
from fixmeet.services.availability import AvailabilityResult
from fixmeet.services.timeutils import to_utc

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_NAME = "slot_recommendation"
MAX_PROMPT_SLOTS = 96
OPTION_ID = "option_a"
OPTION_LABEL = "Option A"

SlotKey = Tuple[datetime, datetime]


def _slot_key(start: datetime, end: datetime) -> SlotKey:
    # Gemini may echo the instant with a different offset.
    return (to_utc(start), to_utc(end))


def _describe_slot(index: int, slot: SlotDisplay, tz_name: str) -> str:
    return (
        f"{index}. {slot.start:%a %d %b} {slot.start_display}-{slot.end_display} {tz_name} "
        f"start={slot.start.isoformat()} end={slot.end.isoformat()}"
    )


def _build_user_prompt(
    request: RecommendationRequest,
    availability: AvailabilityResult,
    slots: List[SlotDisplay],
) -> str:
    sections = [
        f"Scenario: {request.scenario.strip()}",
        f"Date: {availability.date.isoformat()} (invitee timezone {availability.timezone})",
        "Open slots:",
        *(_describe_slot(index, slot, availability.timezone) for index, slot in enumerate(slots, start=1)),
    ]

    if request.previous_options:
        sections.append("Already suggested:")
        sections.extend(
            f"* {option.label} {option.start:%H:%M}-{option.end:%H:%M}"
            + (f" ({option.reason})" if option.reason else "")
            for option in request.previous_options
        )

    turns = [turn for turn in request.conversation if turn.content.strip()]
    if turns:
        sections.append("Conversation so far:")
        sections.extend(f"* {turn.role}: {turn.content.strip()}" for turn in turns)

    return "\n".join(sections)


def _request_json(client: genai.Client, model_name: str, system_prompt: str, user_prompt: str) -> Any:
    config = types.GenerateContentConfig(
        system_instruction=system_prompt,
        temperature=0.35,
        thinking_config=types.ThinkingConfig(thinking_budget=1024),
        response_mime_type="application/json",
    )
    response = client.models.generate_content(
        model=model_name,
        contents=[types.Content(role="user", parts=[types.Part.from_text(text=user_prompt)])],
        config=config,
    )

    text = getattr(response, "text", None)
    if not text:
        raise ValueError("Gemini returned an empty response.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Gemini answered with non-JSON text: %s", text)
        raise ValueError("Gemini response was not valid JSON.") from exc


def _read_instant(choice: Mapping[str, Any], field: str) -> datetime:
    raw = choice.get(field)
    if not isinstance(raw, str):
        raise ValueError(f"Gemini option is missing '{field}'.")
    try:
        value = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValueError(f"Gemini option '{field}' is not an ISO datetime: {raw}") from exc
    if value.tzinfo is None:
        raise ValueError(f"Gemini option '{field}' has no UTC offset.")
    return value


def _pick_choice(payload: Any) -> Tuple[str, Mapping[str, Any]]:
    if not isinstance(payload, dict):
        raise ValueError("Gemini response payload must be a JSON object.")

    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("Gemini response is missing a descriptive message.")

    choice = payload.get("option")
    # Tolerate the list form some models fall back to.
    if choice is None and isinstance(payload.get("options"), list) and payload["options"]:
        choice = payload["options"][0]
    if not isinstance(choice, dict):
        raise ValueError("Gemini response did not include a single option.")

    return message.strip(), choice


def _match_choice(choice: Mapping[str, Any], candidates: Dict[SlotKey, SlotDisplay]) -> RecommendationOption:
    start = _read_instant(choice, "start")
    end = _read_instant(choice, "end")

    slot = candidates.get(_slot_key(start, end))
    if slot is None:
        raise ValueError(
            f"Gemini picked {start.isoformat()} - {end.isoformat()}, which is not an open slot."
        )

    return RecommendationOption(
        id=OPTION_ID,
        label=OPTION_LABEL,
        start=slot.start,
        end=slot.end,
        reason=str(choice.get("reason") or ""),
    )


def generate_recommendation(
    client: genai.Client,
    request: RecommendationRequest,
    availability: AvailabilityResult,
    *,
    model_name: str,
    prompt_name: str = DEFAULT_PROMPT_NAME,
) -> RecommendationResponse:
    """
    Ask Gemini to choose one of the computed slots for the request's scenario.

    The answer is only accepted when it names a slot from ``availability``;
    anything else raises ``ValueError``.
    """
    slots = availability.slots[:MAX_PROMPT_SLOTS]
    if not slots:
        raise ValueError(f"No available slots on {availability.date.isoformat()} to recommend.")

    try:
        system_prompt = load_prompt(prompt_name)
    except (FileNotFoundError, ValueError) as exc:
        raise ValueError(f"System prompt '{prompt_name}' could not be loaded.") from exc

    user_prompt = _build_user_prompt(request, availability, slots)
    logger.debug("Asking %s to choose among %d slots", model_name, len(slots))
    payload = _request_json(client, model_name, system_prompt, user_prompt)

    message, choice = _pick_choice(payload)
    option = _match_choice(choice, {_slot_key(slot.start, slot.end): slot for slot in slots})
    logger.info("Gemini recommended %s for event type %s", option.start.isoformat(), availability.event_type_id)

    return RecommendationResponse(
        scenario=request.scenario,
        message=message,
        options=[option],
        model=model_name,
    )
