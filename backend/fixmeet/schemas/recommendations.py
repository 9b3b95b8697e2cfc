from datetime import date, datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ConversationTurn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str = Field(..., description="What was said in this turn")


class RecommendationOption(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str
    label: str = Field(..., description="Shown to the invitee, e.g. Option A")
    start: datetime = Field(..., description="Slot start in the invitee timezone")
    end: datetime = Field(..., description="Slot end in the invitee timezone")
    reason: str = Field(default="", description="Why the slot suits the scenario")


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    event_type_id: str = Field(..., description="Event type whose open slots are considered")
    slot_date: date = Field(..., alias="date", description="Date to recommend a slot for")
    scenario: str = Field(..., min_length=1, description="What the meeting is for, in the invitee's words")
    conversation: List[ConversationTurn] = Field(default_factory=list)
    timezone: Optional[str] = Field(
        default=None,
        description="Invitee IANA timezone; the host timezone when omitted",
    )
    previous_options: List[RecommendationOption] = Field(
        default_factory=list,
        description="Slots already suggested earlier in the conversation",
    )


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    scenario: str
    message: str = Field(..., description="Gemini's explanation of the choice")
    options: List[RecommendationOption] = Field(default_factory=list)
    model: str = Field(..., description="Gemini model that made the choice")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
