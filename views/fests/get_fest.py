from flask import render_template

from models import Event, Fest
from services import get_backend, get_event_cache
from utils.api_client import BackendAPIError
from utils.decorators import log_action, handle_backend_errors
from utils.helpers import event_belongs_to_fest, format_date, sort_events_by_date

from . import fests_bp, logger


def fest_events(fest, fest_slug):
    """Cached events that belong to this fest; empty if the list is unavailable"""
    try:
        rows = get_event_cache().get_all()
    except BackendAPIError as e:
        logger.warning(f"Event list unavailable for fest {fest_slug}: {e.message}")
        return []
    events = [Event.from_api(row) for row in rows if event_belongs_to_fest(row, fest_slug, fest)]
    return sort_events_by_date(events)


@fests_bp.route('/fest/<fest_slug>', methods=['GET'])
@log_action('View fest')
@handle_backend_errors(template='fest_detail.html')
def get_fest(fest_slug):
    fest = Fest.from_api(get_backend().get_fest(fest_slug))

    return render_template(
        'fest_detail.html',
        fest=fest,
        events=fest_events(fest, fest_slug),
        opening_date=format_date(fest.opening_date),
        closing_date=format_date(fest.closing_date),
        contact_email=fest.contact_email or 'N/A',
        contact_phone=fest.contact_phone or 'N/A',
    )
