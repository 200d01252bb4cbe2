from .settings import settings, get_settings
from .table_names import GuestFields, RSVPFields, TableNames

__all__ = [
    "settings",
    "get_settings",
    "TableNames",
    "GuestFields",
    "RSVPFields",
]
