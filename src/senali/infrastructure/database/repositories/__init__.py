"""
Repository pattern implementations package.
"""

from senali.infrastructure.database.repositories.base import BaseRepository
from senali.infrastructure.database.repositories.user_repository import UserRepository
from senali.infrastructure.database.repositories.profile_repository import ProfileRepository
from senali.infrastructure.database.repositories.chat_message_repository import ChatMessageRepository
from senali.infrastructure.database.repositories.tip_repository import TipRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProfileRepository",
    "ChatMessageRepository",
    "TipRepository",
]
