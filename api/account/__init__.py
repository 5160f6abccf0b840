from api.account.auth import auth_bp

__all__ = ['auth_bp']
