"""commgate - unified HTTP gateway over chat, SMS, voice and email providers."""

__version__ = "0.1.0"
