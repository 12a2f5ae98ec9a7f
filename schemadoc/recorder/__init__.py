from .models import ChannelEvent, ChannelEventKind, Interaction
from .recorder import Recorder

__all__ = ["ChannelEvent", "ChannelEventKind", "Interaction", "Recorder"]
