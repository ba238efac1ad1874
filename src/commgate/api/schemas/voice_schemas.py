"""Request schema for outgoing calls."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from commgate.core.domain.operations import VoiceCall


class VoiceCallRequest(BaseModel):
    """Outgoing call payload; accepts lower-case or provider-cased keys."""

    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("to", "To"),
        description="Destination number.",
        examples=["+15550001"],
    )
    from_: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("from", "From"),
        description="Caller number.",
        examples=["+15550000"],
    )
    twiml: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("twiml", "Twiml", "TwiML"),
        description="Call instructions markup.",
        examples=["<Response><Say>Hello</Say></Response>"],
    )

    def to_domain(self) -> VoiceCall:
        return VoiceCall(to=self.to, from_=self.from_, twiml=self.twiml)
