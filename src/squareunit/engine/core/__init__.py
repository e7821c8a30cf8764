from .frame_clock import FrameClock
from .tickable import Tickable

__all__ = ["FrameClock", "Tickable"]
