from flask import current_app, redirect, render_template, request, url_for

from services import get_session_manager
from utils.decorators import log_action

from . import auth_bp


@auth_bp.route('/auth', methods=['GET', 'POST'])
@log_action('Sign in')
def sign_in():
    """Sign-in page; POST starts the provider's OAuth flow"""
    if request.method == 'GET':
        if get_session_manager().get_session() is not None:
            return redirect(url_for('pages.discover'))
        return render_template('auth.html', allowed_domain=current_app.config['ALLOWED_EMAIL_DOMAIN'])

    app_url = current_app.config['APP_URL'].rstrip('/')
    sign_in_url = get_session_manager().build_sign_in_url(f"{app_url}{url_for('auth.callback')}")
    return redirect(sign_in_url)
