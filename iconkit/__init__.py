# iconkit - application icon asset generator
# Main source package

from .core.app_config import get_version, get_app_name
from .core.pipeline import IconPipeline, generate

__version__ = get_version()
__app_name__ = get_app_name()

__all__ = [
    "IconPipeline",
    "generate",
]
