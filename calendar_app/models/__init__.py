from calendar_app.models.events import Event

__all__ = [
    "Event",
]
