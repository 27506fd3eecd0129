from flask import Blueprint
import logging


events_bp = Blueprint('events', __name__)

logger = logging.getLogger(__name__)

# One module per route
from . import (
    list_events,
    get_event,
    create_event,
    edit_event,
    manage_event,
    register_event,
    get_participants,
    export_participants,
)

__all__ = ['events_bp']
