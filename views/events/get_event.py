from flask import render_template

from models import Event
from services import get_backend
from utils.decorators import log_action, handle_backend_errors

from . import events_bp


@events_bp.route('/event/<event_id>', methods=['GET'])
@log_action('View event')
@handle_backend_errors(template='event_detail.html')
def get_event(event_id):
    event = Event.from_api(get_backend().get_event(event_id))
    return render_template('event_detail.html', event=event)
