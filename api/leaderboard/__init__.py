from flask import Blueprint
import logging


leaderboard_bp = Blueprint('leaderboard', __name__)

logger = logging.getLogger(__name__)

from . import get_leaderboard

__all__ = ['leaderboard_bp']
