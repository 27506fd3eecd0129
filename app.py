from flask import Flask, render_template, request, redirect, g, session
import os
import time
from dotenv import load_dotenv
from werkzeug.middleware.proxy_fix import ProxyFix

load_dotenv()

from config import config as config_map
from services import init_services, get_guard, get_session_manager
from session_manager import SessionManager
from utils.access_guard import GuardOutcome
from utils.helpers import format_date, format_time, slugify
from views import auth_bp, pages_bp, events_bp, fests_bp, clubs_bp


def create_app(config_name=None, *, backend=None, session_manager=None,
               permission_lookup=None, event_cache=None, db_manager=None):
    app = Flask(__name__)
    env_name = (config_name or os.environ.get('APP_ENV', 'default')).lower()
    config_cls = config_map.get(env_name, config_map['default'])
    app.config.from_object(config_cls)
    config_cls.init_app(app)

    if env_name == 'production' and not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY environment variable is required in production')

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    init_services(
        app,
        backend=backend,
        session_manager=session_manager,
        permission_lookup=permission_lookup,
        event_cache=event_cache,
        db_manager=db_manager,
    )

    # Create the users table at startup; a failure is logged, not fatal
    if not app.config.get('TESTING'):
        try:
            app.extensions['campus_events']['db_manager'].init_database()
            app.logger.info("Database initialised")
        except Exception as e:
            app.logger.error(f"Database initialisation failed: {e}")

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info(
                "Request %s %s took %.2fms, status %d",
                request.method,
                request.path,
                duration_ms,
                response.status_code,
            )
        return response

    @app.before_request
    def check_access():
        path = request.path or ''
        g.auth_session = None

        if any(path.startswith(prefix) for prefix in app.config['GUARD_EXCLUDED_PREFIXES']):
            return

        def load_session():
            g.auth_session = get_session_manager().get_session()
            return g.auth_session

        outcome = get_guard().evaluate(path, load_session)
        if outcome is GuardOutcome.REDIRECT_AUTH:
            return redirect(app.config['LOGIN_PATH'])
        if outcome is GuardOutcome.REDIRECT_ERROR:
            return redirect(f"{app.config['ERROR_PATH']}?error=not_authorized")

    @app.context_processor
    def inject_user():
        auth_session = g.get('auth_session')
        if auth_session is None and session.get(SessionManager.SESSION_KEY):
            auth_session = get_session_manager().get_session()
        return {
            'current_email': auth_session.email if auth_session else None,
            'logged_in': auth_session is not None,
            'system_name': app.config['SYSTEM_NAME'],
        }

    app.jinja_env.filters['format_date'] = format_date
    app.jinja_env.filters['format_time'] = format_time
    app.jinja_env.filters['slugify'] = slugify

    @app.errorhandler(404)
    def not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.error(f"Internal server error on {request.path}: {e}")
        return render_template('500.html'), 500

    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(fests_bp)
    app.register_blueprint(clubs_bp)

    return app


app = create_app()


if __name__ == '__main__':
    app.run(
        host=app.config['HOST'],
        port=app.config['PORT'],
        debug=app.config['DEBUG'],
    )
