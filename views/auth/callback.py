from flask import current_app, redirect, request

from services import get_db_manager, get_session_manager
from session_manager import AuthProviderError

from . import auth_bp, logger


def is_allowed_email(email, domain):
    """Whether the address is exactly at the allowed domain (no lookalike suffixes)"""
    suffix = '@' + domain.lower().lstrip('@')
    return bool(email) and email.lower().endswith(suffix)


def _record_user(auth_session):
    """Create the users row on first sign-in; failures do not block sign-in"""
    auth_user = dict(auth_session.user or {})
    auth_user.setdefault('email', auth_session.email)
    try:
        user, is_new = get_db_manager().ensure_user(auth_user)
    except Exception as e:
        logger.error(f"Could not record user {auth_session.email}: {e}")
        return
    if is_new:
        logger.info(f"First sign-in for {user.email}")


@auth_bp.route('/auth/callback', methods=['GET'])
def callback():
    """OAuth redirect target: exchange the code, check the domain, go to /discover"""
    code = request.args.get('code')
    if not code:
        logger.warning("Auth callback invoked without a 'code' parameter.")
        return redirect('/?error=no_code')

    session_manager = get_session_manager()
    try:
        try:
            auth_session = session_manager.exchange_code_for_session(code)
        except AuthProviderError as e:
            logger.error(f"Error exchanging code for session: {e}")
            return redirect('/?error=auth_exchange_failed')

        if not auth_session.email:
            logger.warning('No user email found after successful code exchange.')
            session_manager.sign_out()
            return redirect('/?error=auth_incomplete')

        if not is_allowed_email(auth_session.email, current_app.config['ALLOWED_EMAIL_DOMAIN']):
            logger.info(f"Rejected sign-in from outside the allowed domain: {auth_session.email}")
            session_manager.sign_out()
            return redirect('/error?error=invalid_domain')

        _record_user(auth_session)
        return redirect('/discover')
    except Exception as e:
        logger.error(f"Unexpected error in auth callback: {e}")
        session_manager.sign_out()
        return redirect('/?error=callback_exception')
