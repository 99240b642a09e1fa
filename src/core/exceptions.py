"""Exception types raised by the allocation sandbox."""


class SandboxError(Exception):
    """Base class for sandbox errors."""


class ValidationError(SandboxError, ValueError):
    """Request rejected before any computation ran."""


class PortfolioNotFoundError(SandboxError, KeyError):
    """No optimization result stored for the requested session."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Portfolio not found: {session_id}")

    def __str__(self) -> str:
        return self.args[0]


class InternalError(SandboxError):
    """Unexpected failure surfaced to callers as a generic error."""
