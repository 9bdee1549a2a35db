from .config import Settings, load_settings
from .services import SupabaseClient

__all__ = [
    "Settings",
    "load_settings",
    "SupabaseClient",
]
