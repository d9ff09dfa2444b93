from alumni.modules.auth.dependencies import get_current_identity, get_current_admin

__all__ = ["get_current_identity", "get_current_admin"]
