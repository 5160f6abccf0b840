from flask import Blueprint
import logging

from database import DatabaseManager


voting_bp = Blueprint('voting', __name__)

db_manager = DatabaseManager()
logger = logging.getLogger(__name__)

from . import (
    submit_vote,
    check_vote,
)

__all__ = ['voting_bp']
