"""Operation requests and provider responses.

Field sets are provider-defined and passed through verbatim: the gateway
does not normalize field names across providers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from commgate.core.domain.errors import ValidationError


def encode_form_fields(fields: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten a field mapping into ordered form pairs.

    ``None`` values are omitted, booleans are lower-cased, and list or
    tuple values become repeated keys.
    """
    pairs: list[tuple[str, str]] = []
    for name, value in fields.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if item is None:
                continue
            if isinstance(item, bool):
                pairs.append((name, "true" if item else "false"))
            elif isinstance(item, (dict, list, tuple)):
                raise ValidationError(
                    f"Field '{name}' cannot be form-encoded",
                    details={"field": name},
                )
            else:
                pairs.append((name, str(item)))
    return pairs


@dataclass(frozen=True)
class OperationRequest:
    """A named provider operation plus its field mapping.

    Attributes:
        operation: Operation name, e.g. ``create_conversation``.
        fields: Ordered field name -> value mapping.
    """

    operation: str
    fields: dict[str, Any] = field(default_factory=dict)

    def form_pairs(self) -> list[tuple[str, str]]:
        return encode_form_fields(self.fields)


@dataclass(frozen=True)
class VoiceCall:
    """Outgoing call parameters.

    Attributes:
        to: Destination number.
        from_: Caller number.
        twiml: Markup the provider executes once the call connects.
    """

    to: str
    from_: str
    twiml: str

    def __post_init__(self) -> None:
        for name, value in (("to", self.to), ("from", self.from_), ("twiml", self.twiml)):
            if not value or not value.strip():
                raise ValidationError(
                    f"Voice call field '{name}' must not be empty",
                    details={"field": name},
                )

    def to_request(self) -> OperationRequest:
        return OperationRequest(
            operation="create_call",
            fields={"To": self.to, "From": self.from_, "Twiml": self.twiml},
        )


@dataclass(frozen=True)
class ProviderResponse:
    """Outcome of one provider call.

    Attributes:
        status_code: HTTP status returned by the provider.
        payload: Parsed JSON tree, or None for no-body responses.
    """

    status_code: int
    payload: Any = None

    @property
    def is_empty(self) -> bool:
        return self.payload is None
