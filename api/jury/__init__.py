from flask import Blueprint
import logging


jury_bp = Blueprint('jury', __name__)

logger = logging.getLogger(__name__)

from . import submit_jury_score

__all__ = ['jury_bp']
