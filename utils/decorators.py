#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - view decorators
"""

from functools import wraps
from flask import session, redirect, url_for, flash, request, render_template
import logging
import time

from utils.api_client import BackendAPIError

logger = logging.getLogger(__name__)


def _current_email():
    auth = session.get('auth_session') or {}
    return auth.get('email') or 'anonymous'


def log_action(action_name):
    """Log start, success and failure (with duration) of a view action

    Args:
        action_name: human readable action name
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            email = _current_email()
            start_time = time.perf_counter()
            logger.info(f"{email} started: {action_name}")

            try:
                result = f(*args, **kwargs)

                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(f"{email} finished: {action_name}, took {duration_ms:.1f} ms")

                return result

            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"{email} failed: {action_name}, took {duration_ms:.1f} ms, error: {str(e)}"
                )
                raise

        return decorated_function
    return decorator


def handle_backend_errors(template=None, redirect_endpoint=None):
    """Turn an uncaught BackendAPIError into a rendered error state

    Args:
        template: template rendered with `error` set (status from the backend)
        redirect_endpoint: alternatively flash and redirect here
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except BackendAPIError as e:
                logger.error(f"Backend error on {request.path}: {e.message}")
                status = e.status_code if e.status_code in (400, 404) else 502
                if template:
                    return render_template(template, error=e.message), status
                flash(e.message, 'error')
                return redirect(url_for(redirect_endpoint or 'pages.index'))
        return decorated_function
    return decorator
