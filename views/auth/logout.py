from flask import flash, redirect, url_for

from services import get_session_manager
from utils.decorators import log_action

from . import auth_bp


@auth_bp.route('/auth/logout', methods=['POST'])
@log_action('Sign out')
def logout():
    get_session_manager().sign_out()
    flash('You have been signed out.', 'info')
    return redirect(url_for('pages.index'))
