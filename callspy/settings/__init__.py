from .config import CallspyConfig  # noqa:F401
from .config import config  # noqa:F401
