import re

from flask import flash, redirect, render_template, request, url_for

from models import Event
from services import get_backend
from utils.api_client import BackendAPIError
from utils.decorators import log_action, handle_backend_errors

from . import events_bp, logger

REGISTER_NUMBER_PATTERN = re.compile(r'\d{7}')


def validate_registration(register_numbers, team_size):
    """Error messages for the team registration form"""
    errors = []
    if not register_numbers:
        errors.append('At least one register number is required.')
    for number in register_numbers:
        if not REGISTER_NUMBER_PATTERN.fullmatch(number):
            errors.append(f"Register number '{number}' must be exactly 7 digits.")
    if len(set(register_numbers)) != len(register_numbers):
        errors.append('Register numbers must be unique.')
    if team_size and len(register_numbers) > team_size:
        errors.append(f"A team can have at most {team_size} members.")
    return errors


@events_bp.route('/event/<event_id>/register', methods=['GET', 'POST'])
@log_action('Register for event')
@handle_backend_errors(template='register_event.html')
def register_event(event_id):
    event = Event.from_api(get_backend().get_event(event_id))
    team_size = event.participants_per_team if isinstance(event.participants_per_team, int) else None

    if request.method == 'GET':
        return render_template('register_event.html', event=event, team_size=team_size,
                               team_name='', register_numbers=[], errors=[])

    team_name = request.form.get('teamName', '').strip()
    register_numbers = [n.strip() for n in request.form.getlist('registerNumber') if n.strip()]

    errors = validate_registration(register_numbers, team_size)
    if errors:
        return render_template('register_event.html', event=event, team_size=team_size,
                               team_name=team_name, register_numbers=register_numbers,
                               errors=errors), 400

    try:
        get_backend().register_for_event(event_id, register_numbers, team_name=team_name)
    except BackendAPIError as e:
        logger.error(f"Registration for {event_id} failed: {e.message}")
        return render_template('register_event.html', event=event, team_size=team_size,
                               team_name=team_name, register_numbers=register_numbers,
                               errors=[e.message]), 400 if e.status_code == 400 else 502

    flash('Registration successful!', 'success')
    return redirect(url_for('events.get_event', event_id=event_id))
