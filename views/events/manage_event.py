from flask import flash, g, redirect, url_for

from services import get_backend, get_event_cache
from utils.decorators import log_action, handle_backend_errors

from . import events_bp, logger


@events_bp.route('/edit/event/<event_id>/delete', methods=['POST'])
@log_action('Delete event')
@handle_backend_errors(redirect_endpoint='pages.manage')
def delete_event(event_id):
    result = get_backend().delete_event(event_id, g.auth_session.access_token)
    get_event_cache().invalidate()

    logger.info(f"Event {event_id} deleted by {g.auth_session.email}")
    flash(result.get('message') or 'Event deleted successfully.', 'success')
    return redirect(url_for('pages.manage'))


@events_bp.route('/edit/event/<event_id>/close', methods=['POST'])
@log_action('Close registrations')
@handle_backend_errors(redirect_endpoint='pages.manage')
def close_registrations(event_id):
    """Stop accepting registrations; the backend moves the deadline to now"""
    result = get_backend().close_registrations(event_id, g.auth_session.access_token)
    get_event_cache().invalidate()

    flash(result.get('message') or 'Registration closed successfully.', 'success')
    return redirect(url_for('events.edit_event', event_id=event_id))
