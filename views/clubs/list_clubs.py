from flask import render_template, request

from . import clubs_bp
from .directory import CENTRE_FILTERS, filter_centres


@clubs_bp.route('/clubs', methods=['GET'])
def list_clubs():
    active_filter = request.args.get('filter', 'All')
    if active_filter not in CENTRE_FILTERS:
        active_filter = 'All'
    return render_template(
        'clubs.html',
        centres=filter_centres(active_filter),
        filters=CENTRE_FILTERS,
        active_filter=active_filter,
    )
