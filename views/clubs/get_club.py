from flask import abort, render_template

from . import clubs_bp
from .directory import find_club


@clubs_bp.route('/club/<int:club_id>', methods=['GET'])
def get_club(club_id):
    club = find_club(club_id)
    if club is None:
        abort(404)
    return render_template('club_detail.html', club=club)
