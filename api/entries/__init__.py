from flask import Blueprint
import logging


entries_bp = Blueprint('entries', __name__)

logger = logging.getLogger(__name__)

from . import (
    submit_entry,
    get_entries,
    get_entry,
    get_user_entries,
)

__all__ = ['entries_bp']
