from flask import render_template, request

from . import pages_bp

ERROR_MESSAGES = {
    'invalid_domain': (
        'Invalid account',
        'Please sign in with your university e-mail address.',
    ),
    'not_authorized': (
        'Access denied',
        'Only event organisers can open this page.',
    ),
}
DEFAULT_ERROR = ('Something went wrong', 'An unexpected error occurred. Please try again.')


@pages_bp.route('/error', methods=['GET'])
def error():
    code = request.args.get('error', '')
    title, message = ERROR_MESSAGES.get(code, DEFAULT_ERROR)
    return render_template('error.html', code=code, title=title, message=message)
