class PlannerError(Exception):
    """Base class for study planner errors."""


class InputError(PlannerError):
    """Request payload is malformed or incomplete (reported as HTTP 400)."""


class LLMError(PlannerError):
    """Text-generation call failed: transport, status, timeout or unparseable output."""
