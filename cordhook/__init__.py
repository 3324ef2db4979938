from .client import InteractionRouter
from .core import create_app
from .version import VERSION

__all__ = (
    'VERSION',
    'InteractionRouter',
    'create_app',
)
