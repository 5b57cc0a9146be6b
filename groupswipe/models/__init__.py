"""
Import all models to ensure they are registered with SQLAlchemy
"""
from groupswipe.models.profile import Profile
from groupswipe.models.title import Title
from groupswipe.models.group import Group, GroupMember
from groupswipe.models.swipe import Swipe
from groupswipe.models.preference import Preference
from groupswipe.models.match import Match, MatchMember
from groupswipe.models.rating import MatchRating

__all__ = [
    "Profile",
    "Title",
    "Group",
    "GroupMember",
    "Swipe",
    "Preference",
    "Match",
    "MatchMember",
    "MatchRating"
]
