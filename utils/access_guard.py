"""
Route access gate.

Every page request goes through a two-stage pipeline:

1. session stage: is there a session, or is the path public?
2. privilege stage: for organiser-only prefixes, is the user an organiser?

Each stage yields a GuardOutcome. Any failure in the privilege lookup counts
as "not authorized"; nothing is cached between requests.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class GuardOutcome(Enum):
    ALLOW = 'allow'
    REDIRECT_AUTH = 'redirect_auth'
    REDIRECT_ERROR = 'redirect_error'


def is_asset_path(path, asset_prefixes=('/_next/', '/static/')):
    """Static-asset-like paths skip the gate entirely"""
    return '.' in path or any(path.startswith(prefix) for prefix in asset_prefixes)


def is_public_path(path, public_paths):
    """Exact match, or prefix match for entries ending in '/*'"""
    for public_path in public_paths:
        if path == public_path:
            return True
        if public_path.endswith('/*') and path.startswith(public_path[:-2]):
            return True
    return False


def is_privileged_path(path, privileged_prefixes):
    return any(path.startswith(prefix) for prefix in privileged_prefixes)


class AccessGuard:
    """Decides, per request path, whether to allow or where to redirect.

    Args:
        public_paths: paths reachable without a session
        privileged_prefixes: path prefixes reserved for organisers
        permission_lookup: callable(email) -> bool or None; may raise
        asset_prefixes: prefixes treated as static assets
    """

    def __init__(self, public_paths, privileged_prefixes, permission_lookup,
                 asset_prefixes=('/_next/', '/static/')):
        self.public_paths = list(public_paths)
        self.privileged_prefixes = list(privileged_prefixes)
        self.permission_lookup = permission_lookup
        self.asset_prefixes = tuple(asset_prefixes)

    def session_stage(self, path, auth_session):
        if auth_session is None and not is_public_path(path, self.public_paths):
            return GuardOutcome.REDIRECT_AUTH
        return GuardOutcome.ALLOW

    def privilege_stage(self, path, auth_session):
        if auth_session is None or not is_privileged_path(path, self.privileged_prefixes):
            return GuardOutcome.ALLOW

        email = auth_session.email
        if not email:
            logger.warning(f"Session without email requested {path}")
            return GuardOutcome.REDIRECT_ERROR

        try:
            is_organiser = self.permission_lookup(email)
        except Exception as e:
            logger.error(f"Organiser lookup failed for {email}: {e}")
            return GuardOutcome.REDIRECT_ERROR

        if not is_organiser:
            logger.info(f"{email} is not an organiser, denied {path}")
            return GuardOutcome.REDIRECT_ERROR
        return GuardOutcome.ALLOW

    def evaluate(self, path, load_session):
        """Run the pipeline.

        load_session is only called once the path is known not to be an
        asset, so asset requests never touch the session store.
        """
        if is_asset_path(path, self.asset_prefixes):
            return GuardOutcome.ALLOW

        auth_session = load_session()
        for stage in (self.session_stage, self.privilege_stage):
            outcome = stage(path, auth_session)
            if outcome is not GuardOutcome.ALLOW:
                return outcome
        return GuardOutcome.ALLOW
