from flask import request

from utils.decorators import log_action

from . import fests_bp
from .form_page import render_fest_form, submit_fest_form


@fests_bp.route('/create/fest', methods=['GET', 'POST'])
@log_action('Create fest')
def create_fest():
    if request.method == 'POST':
        return submit_fest_form()
    return render_fest_form({'department': [], 'eventHeads': []})
