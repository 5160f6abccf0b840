from flask import Blueprint

from database import DatabaseManager


maintenance_bp = Blueprint('maintenance', __name__)

db_manager = DatabaseManager()

from . import health

__all__ = ['maintenance_bp']
