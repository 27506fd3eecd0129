from .auth import auth_bp
from .pages import pages_bp
from .events import events_bp
from .fests import fests_bp
from .clubs import clubs_bp

__all__ = ['auth_bp', 'pages_bp', 'events_bp', 'fests_bp', 'clubs_bp']
