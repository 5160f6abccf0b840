"""Database domain mixins package."""

from .db_users import UserDbMixin
from .db_entries import EntryDbMixin
from .db_votes import VoteDbMixin
from .db_scores import JuryScoreDbMixin

__all__ = [
    "UserDbMixin",
    "EntryDbMixin",
    "VoteDbMixin",
    "JuryScoreDbMixin",
]
