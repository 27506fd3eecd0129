from flask import render_template

from models import Fest
from services import get_backend
from utils.api_client import BackendAPIError
from utils.decorators import log_action
from views.clubs.directory import CENTRES

from . import pages_bp, logger
from .home import upcoming_events

DISCOVER_EVENT_LIMIT = 6
DISCOVER_FEST_LIMIT = 3


@pages_bp.route('/discover', methods=['GET'])
@log_action('Discover')
def discover():
    try:
        fests = [Fest.from_api(row) for row in get_backend().get_fests()][:DISCOVER_FEST_LIMIT]
    except BackendAPIError as e:
        logger.warning(f"Fests unavailable on discover: {e.message}")
        fests = []

    return render_template(
        'discover.html',
        events=upcoming_events(limit=DISCOVER_EVENT_LIMIT),
        fests=fests,
        centres=CENTRES[:4],
    )
