from .http import Route, request, sync_commands
from .commands import CommandRegistry
from .types import Snowflake
from .models import * # noqa: F403

__all__ = (
    'CommandRegistry',
    'Route',
    'Snowflake',
    'request',
    'sync_commands',
)
