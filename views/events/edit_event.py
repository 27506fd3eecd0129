from flask import request

from models import Event
from services import get_backend
from utils.decorators import log_action, handle_backend_errors
from utils.event_form import event_to_form_fields

from . import events_bp
from .form_page import render_event_form, submit_event_form


@events_bp.route('/edit/event/<event_id>', methods=['GET', 'POST'])
@log_action('Edit event')
@handle_backend_errors(redirect_endpoint='pages.manage')
def edit_event(event_id):
    if request.method == 'POST':
        return submit_event_form(event_id=event_id)

    event = Event.from_api(get_backend().get_event(event_id))
    return render_event_form(event_to_form_fields(event), event_id=event_id)
