"""Request-scoped dependencies for the API routers."""

from fastapi import Request

from meal_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the application container stored on the app."""
    return request.app.state.container


def resolve_user_id(container: AppContainer, user_id: str | None) -> str:
    """Return the requested user id or the configured default user."""
    if user_id and user_id.strip():
        return user_id.strip()
    return container.settings.default_user_id
