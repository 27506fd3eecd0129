#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - per-app service registry

Collaborators (backend client, auth sessions, permission lookup, event
cache) are built once per app and stored in app.extensions so tests can
swap any of them.
"""

import logging

from flask import current_app

from database import DatabaseManager
from session_manager import SessionManager
from utils.access_guard import AccessGuard
from utils.api_client import BackendClient
from utils.event_cache import EventCache, get_redis_client

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'campus_events'


def init_services(app, backend=None, session_manager=None, permission_lookup=None,
                  event_cache=None, db_manager=None):
    cfg = app.config

    # Pool creation is deferred to the first query
    db_manager = db_manager or DatabaseManager(_ConfigView(cfg))

    backend = backend or BackendClient(cfg['API_URL'], timeout=cfg['API_TIMEOUT'])
    session_manager = session_manager or SessionManager(
        cfg['AUTH_URL'],
        cfg['AUTH_ANON_KEY'],
        provider=cfg['AUTH_PROVIDER'],
        timeout=cfg['API_TIMEOUT'],
    )
    if permission_lookup is None:
        permission_lookup = db_manager.get_organiser_flag
    event_cache = event_cache or EventCache(
        backend.get_events,
        ttl_seconds=cfg['EVENT_CACHE_TTL'],
        redis_client=get_redis_client(cfg.get('REDIS_URL')),
    )
    guard = AccessGuard(
        cfg['PUBLIC_PATHS'],
        cfg['PRIVILEGED_PREFIXES'],
        permission_lookup,
        asset_prefixes=cfg['ASSET_PREFIXES'],
    )

    app.extensions[EXTENSION_KEY] = {
        'db_manager': db_manager,
        'backend': backend,
        'session_manager': session_manager,
        'event_cache': event_cache,
        'guard': guard,
    }


class _ConfigView:
    """Attribute access over app.config for DatabaseManager"""

    def __init__(self, cfg):
        self._cfg = cfg

    def __getattr__(self, item):
        try:
            return self._cfg[item]
        except KeyError:
            raise AttributeError(item)


def _service(name):
    return current_app.extensions[EXTENSION_KEY][name]


def get_backend():
    return _service('backend')


def get_session_manager():
    return _service('session_manager')


def get_event_cache():
    return _service('event_cache')


def get_guard():
    return _service('guard')


def get_db_manager():
    return _service('db_manager')
