from datetime import date

from flask import g, render_template

from services import get_backend, get_db_manager
from utils.api_client import BackendAPIError
from utils.decorators import log_action
from utils.helpers import format_date, parse_date

from . import pages_bp, logger


def registered_events(register_number, today=None):
    """The student's registrations, each marked upcoming or completed"""
    today = today or date.today()
    try:
        rows = get_backend().get_user_events(register_number)
    except BackendAPIError as e:
        logger.warning(f"Registered events unavailable for {register_number}: {e.message}")
        return []

    events = []
    for row in rows:
        event_day = parse_date(row.get('date'))
        events.append({
            'id': row.get('id'),
            'name': row.get('name') or '',
            'date': format_date(event_day, '%B %d, %Y'),
            'department': row.get('department') or '',
            'status': 'completed' if event_day and event_day < today else 'upcoming',
        })
    return events


@pages_bp.route('/profile', methods=['GET'])
@log_action('View profile')
def profile():
    email = g.auth_session.email
    try:
        user = get_db_manager().get_user_by_email(email)
    except Exception as e:
        logger.error(f"Could not load profile for {email}: {e}")
        return render_template('profile.html', user=None, events=[],
                               error='Your profile could not be loaded. Please try again.'), 502

    if user is None:
        return render_template('profile.html', user=None, events=[],
                               error='No profile found for this account.'), 404

    events = registered_events(user.register_number) if user.register_number else []
    return render_template('profile.html', user=user, events=events, error=None)
