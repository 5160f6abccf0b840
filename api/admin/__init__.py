from flask import Blueprint
import logging


admin_bp = Blueprint('admin', __name__)

logger = logging.getLogger(__name__)

from . import (
    admin_login,
    admin_logout,
    update_entry_status,
    get_admin_entries,
    get_admin_stats,
    export_leaderboard,
)

__all__ = ['admin_bp']
