from .widget import TimelineWidget

__all__ = ["TimelineWidget"]
