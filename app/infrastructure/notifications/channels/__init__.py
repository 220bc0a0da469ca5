"""Channel adapters for notification delivery."""

from infrastructure.notifications.channels.base import ChannelAdapter
from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.channels.file import FileChannel
from infrastructure.notifications.channels.internal_log import InternalLogChannel
from infrastructure.notifications.channels.mail import MailChannel
from infrastructure.notifications.channels.voice_call import VoiceCallChannel

__all__ = [
    "ChannelAdapter",
    "ChatChannel",
    "FileChannel",
    "InternalLogChannel",
    "MailChannel",
    "VoiceCallChannel",
]
