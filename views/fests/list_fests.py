from flask import render_template, request

from models import Fest
from services import get_backend
from utils.decorators import log_action, handle_backend_errors

from . import fests_bp


@fests_bp.route('/fests', methods=['GET'])
@log_action('List fests')
@handle_backend_errors(template='fests.html')
def list_fests():
    query = request.args.get('q', '').strip()
    fests = [Fest.from_api(row) for row in get_backend().get_fests() if isinstance(row, dict)]
    if query:
        fests = [f for f in fests if query.lower() in f.fest_title.lower()]
    return render_template('fests.html', fests=fests, query=query)
