from flask import g, render_template, request

from models import Event, Fest
from services import get_backend, get_event_cache
from utils.decorators import log_action, handle_backend_errors

from . import pages_bp


def _matches(title, query):
    return not query or query.lower() in (title or '').lower()


@pages_bp.route('/manage', methods=['GET'])
@log_action('Manage events')
@handle_backend_errors(template='manage.html')
def manage():
    """Organiser dashboard: the signed-in user's events and fests"""
    email = g.auth_session.email
    query = request.args.get('q', '').strip()

    events = [Event.from_api(row) for row in get_event_cache().get_all()]
    fests = [Fest.from_api(row) for row in get_backend().get_fests() if isinstance(row, dict)]

    return render_template(
        'manage.html',
        events=[e for e in events if e.created_by == email and _matches(e.title, query)],
        fests=[f for f in fests if f.created_by == email and _matches(f.fest_title, query)],
        query=query,
    )
