"""
Shared create/edit fest page handling
"""

from flask import current_app, flash, redirect, render_template, request, url_for

from services import get_backend, get_session_manager
from utils.event_submission import EventSubmissionError, FestSubmitter, SubmissionAuthError
from utils.fest_form import fields_from_form, validate_fest_form

from . import logger


def render_fest_form(values, errors=None, fest_id=None, status=200):
    return render_template(
        'fest_form.html',
        values=values,
        errors=errors.by_field() if errors else {},
        fest_id=fest_id,
        categories=current_app.config['FEST_CATEGORIES'],
        departments=current_app.config['EVENT_CONFIG']['departments'],
    ), status


def submit_fest_form(fest_id=None):
    fields = fields_from_form(request.form)
    data, errors = validate_fest_form(fields, request.files, is_edit=bool(fest_id))
    if errors:
        logger.info(f"Fest form rejected with {len(errors)} error(s): {sorted(errors.by_field())}")
        return render_fest_form(fields, errors, fest_id, 400)

    submitter = FestSubmitter(get_backend(), get_session_manager())
    try:
        result = submitter.submit(data, fest_id=fest_id)
    except SubmissionAuthError:
        return redirect(current_app.config['LOGIN_PATH'])
    except EventSubmissionError as e:
        status = e.status_code if e.status_code and 400 <= e.status_code < 500 else 502
        return render_fest_form(fields, None, fest_id, status)

    fest = result.get('fest') if isinstance(result, dict) else None
    saved_id = (fest or {}).get('fest_id') or fest_id
    flash('Fest updated successfully.' if fest_id else 'Fest created successfully.', 'success')
    if saved_id:
        return redirect(url_for('fests.get_fest', fest_slug=saved_id))
    return redirect(url_for('pages.manage'))
