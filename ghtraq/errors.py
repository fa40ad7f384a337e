"""Error taxonomy for the relay pipeline."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every failure raised by the relay."""


class ConfigError(RelayError):
    """Process configuration is unusable; the server must not start."""


class AuthenticationFailure(RelayError):
    """Signature header missing, malformed or not matching the body."""


class DecodeFailure(RelayError):
    """Body is not valid JSON or lacks fields the event variant needs."""

    def __init__(self, event_type: str, detail: str) -> None:
        super().__init__(f"failed to parse {event_type!r} payload: {detail}")
        self.event_type = event_type
        self.detail = detail


class UnsupportedEvent(RelayError):
    """Event type is well-formed but not handled; accepted and ignored."""

    def __init__(self, event_type: str | None) -> None:
        super().__init__(f"unsupported event type: {event_type or '-'}")
        self.event_type = event_type


class ContractViolation(RelayError, TypeError):
    """A facet was queried on an event variant that cannot provide it."""

    def __init__(self, facet: str, event: object) -> None:
        super().__init__(f"{type(event).__name__} does not support the {facet!r} facet")
        self.facet = facet


class MissingFieldError(RelayError):
    """``MessageBuilder.build`` called before title and footer were set."""

    def __init__(self, *fields: str) -> None:
        super().__init__("message is missing required field(s): " + ", ".join(fields))
        self.fields = fields


class DeliveryFailure(RelayError):
    """Outbound post failed in transport or got a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
