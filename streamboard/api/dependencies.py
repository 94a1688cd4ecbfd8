"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from streamboard.context import AppContext


def get_context(request: Request) -> AppContext:
    """Get the application context created at startup."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("AppContext not initialized. Is the app lifespan running?")
    return context
