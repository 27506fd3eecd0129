from flask import render_template, request

from models import Event
from services import get_event_cache
from utils.decorators import log_action, handle_backend_errors
from utils.helpers import sort_events_by_date

from . import events_bp


def filter_events(events, category=None, query=None):
    """Category (case-insensitive equality) and title substring filters"""
    if category and category.lower() != 'all':
        events = [e for e in events if (e.category or '').lower() == category.lower()]
    if query:
        needle = query.lower()
        events = [e for e in events if needle in e.title.lower()]
    return events


@events_bp.route('/events', methods=['GET'])
@log_action('List events')
@handle_backend_errors(template='events.html')
def list_events():
    """All events with optional ?category= and ?q= filters"""
    category = request.args.get('category', '').strip()
    query = request.args.get('q', '').strip()

    events = [Event.from_api(row) for row in get_event_cache().get_all()]
    events = filter_events(sort_events_by_date(events), category, query)

    return render_template(
        'events.html',
        events=events,
        category=category,
        query=query,
    )
