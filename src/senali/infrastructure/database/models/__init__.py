"""
Database ORM models package.
"""

from senali.infrastructure.database.models.user_model import UserModel
from senali.infrastructure.database.models.child_profile_model import ChildProfileModel
from senali.infrastructure.database.models.chat_message_model import ChatMessageModel
from senali.infrastructure.database.models.daily_tip_model import DailyTipModel

__all__ = [
    "UserModel",
    "ChildProfileModel",
    "ChatMessageModel",
    "DailyTipModel",
]
