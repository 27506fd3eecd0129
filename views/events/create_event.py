from flask import request

from utils.decorators import log_action

from . import events_bp
from .form_page import render_event_form, submit_event_form


@events_bp.route('/create/event', methods=['GET', 'POST'])
@log_action('Create event')
def create_event():
    if request.method == 'POST':
        return submit_event_form()
    return render_event_form({'festEvent': 'none', 'department': []})
