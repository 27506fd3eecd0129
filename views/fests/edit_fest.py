from flask import flash, g, redirect, request, url_for

from models import Fest
from services import get_backend
from utils.decorators import log_action, handle_backend_errors
from utils.fest_form import fest_to_form_fields

from . import fests_bp, logger
from .form_page import render_fest_form, submit_fest_form


@fests_bp.route('/edit/fest/<fest_id>', methods=['GET', 'POST'])
@log_action('Edit fest')
@handle_backend_errors(redirect_endpoint='pages.manage')
def edit_fest(fest_id):
    if request.method == 'POST':
        return submit_fest_form(fest_id=fest_id)

    fest = Fest.from_api(get_backend().get_fest(fest_id))
    return render_fest_form(fest_to_form_fields(fest), fest_id=fest_id)


@fests_bp.route('/edit/fest/<fest_id>/delete', methods=['POST'])
@log_action('Delete fest')
@handle_backend_errors(redirect_endpoint='pages.manage')
def delete_fest(fest_id):
    result = get_backend().delete_fest(fest_id, g.auth_session.access_token)

    logger.info(f"Fest {fest_id} deleted by {g.auth_session.email}")
    flash(result.get('message') or 'Fest deleted successfully.', 'success')
    return redirect(url_for('pages.manage'))
