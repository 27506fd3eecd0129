"""
Shared create/edit event page handling
"""

from flask import current_app, flash, redirect, render_template, request, url_for

from models import Fest
from services import get_backend, get_event_cache, get_session_manager
from utils.api_client import BackendAPIError
from utils.event_form import fields_from_form, validate_event_form
from utils.event_submission import EventSubmissionError, EventSubmitter, SubmissionAuthError

from . import logger


def fest_options():
    """Fests for the 'part of a fest' select; empty when the backend is down"""
    try:
        return [Fest.from_api(row) for row in get_backend().get_fests()]
    except BackendAPIError as e:
        logger.warning(f"Fest list unavailable for event form: {e.message}")
        return []


def render_event_form(values, errors=None, event_id=None, status=200):
    return render_template(
        'event_form.html',
        values=values,
        errors=errors.by_field() if errors else {},
        event_id=event_id,
        fests=fest_options(),
        options=current_app.config['EVENT_CONFIG'],
    ), status


def submit_event_form(event_id=None):
    """Validate the posted form, then create or update the event"""
    fields = fields_from_form(request.form)
    data, errors = validate_event_form(fields, request.files)
    if errors:
        logger.info(f"Event form rejected with {len(errors)} error(s): {sorted(errors.by_field())}")
        return render_event_form(fields, errors, event_id, 400)

    submitter = EventSubmitter(get_backend(), get_session_manager())
    try:
        result = submitter.submit(data, event_id=event_id)
    except SubmissionAuthError:
        return redirect(current_app.config['LOGIN_PATH'])
    except EventSubmissionError as e:
        status = e.status_code if e.status_code and 400 <= e.status_code < 500 else 502
        return render_event_form(fields, None, event_id, status)

    get_event_cache().invalidate()

    event = result.get('event') if isinstance(result, dict) else None
    saved_id = (event or {}).get('event_id') or event_id
    flash('Event updated successfully.' if event_id else 'Event created successfully.', 'success')
    if saved_id:
        return redirect(url_for('events.get_event', event_id=saved_id))
    return redirect(url_for('pages.manage'))
