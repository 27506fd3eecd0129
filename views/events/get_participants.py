from flask import render_template, request

from models import Event, Student
from services import get_backend
from utils.decorators import log_action, handle_backend_errors
from utils.helpers import filter_students

from . import events_bp


def load_students(event_id):
    return [Student.from_api(row) for row in get_backend().get_registrations(event_id) if isinstance(row, dict)]


@events_bp.route('/event/<event_id>/participants', methods=['GET'])
@log_action('View participants')
@handle_backend_errors(template='participants.html')
def get_participants(event_id):
    """Registrant list with ?q= search"""
    query = request.args.get('q', '').strip()
    event = Event.from_api(get_backend().get_event(event_id))
    students = load_students(event_id)

    return render_template(
        'participants.html',
        event=event,
        students=filter_students(students, query),
        total=len(students),
        query=query,
    )
