"""
Database entities.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from .achievements import Achievement, AchievementCategory
from .ama import AMACategory, AMAQuestion, AMAVote, QuestionStatus, VoteTarget, VoteType
from .contacts import ContactStatus, ContactSubmission
from .content import Category, ContentType, Event, News, PublishStatus
from .emergency import (
    EmergencyContact,
    EmergencyPriority,
    EmergencyRequest,
    EmergencyResource,
    EmergencyStatus,
)
from .polls import Poll, PollOption, PollPhase, PollStatus, PollVote
from .settings import SettingTranslation, SiteSetting
from .store import Order, OrderItem, OrderStatus, Product, ProductVariant
from .users import User, UserRole
from .volunteers import Volunteer, VolunteerStatus
from .voters import Voter, VoterMetadata

__all__ = [
    "AMACategory",
    "AMAQuestion",
    "AMAVote",
    "Achievement",
    "AchievementCategory",
    "Category",
    "ContactStatus",
    "ContactSubmission",
    "ContentType",
    "EmergencyContact",
    "EmergencyPriority",
    "EmergencyRequest",
    "EmergencyResource",
    "EmergencyStatus",
    "Event",
    "News",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Poll",
    "PollOption",
    "PollPhase",
    "PollStatus",
    "PollVote",
    "Product",
    "ProductVariant",
    "PublishStatus",
    "QuestionStatus",
    "SettingTranslation",
    "SiteSetting",
    "User",
    "UserRole",
    "Volunteer",
    "VolunteerStatus",
    "Voter",
    "VoterMetadata",
    "VoteTarget",
    "VoteType",
]
