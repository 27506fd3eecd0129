from datetime import date

from flask import render_template

from models import Event
from services import get_event_cache
from utils.api_client import BackendAPIError
from utils.helpers import parse_date, sort_events_by_date

from . import pages_bp, logger

UPCOMING_LIMIT = 3


def upcoming_events(limit=UPCOMING_LIMIT, today=None):
    """Next events on or after today, soonest first"""
    today = today or date.today()
    try:
        rows = get_event_cache().get_all()
    except BackendAPIError as e:
        logger.warning(f"Upcoming events unavailable: {e.message}")
        return []
    events = [Event.from_api(row) for row in rows]
    events = [e for e in events if parse_date(e.event_date) and parse_date(e.event_date) >= today]
    return sort_events_by_date(events)[:limit]


@pages_bp.route('/', methods=['GET'])
def index():
    return render_template('index.html', events=upcoming_events())


@pages_bp.route('/about', methods=['GET'])
def about():
    return render_template('about.html')
