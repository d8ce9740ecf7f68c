"""greeny-auth: identity and session-token service for the Greeny marketplace."""

__version__ = "0.1.0"
