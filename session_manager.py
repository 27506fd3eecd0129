#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - hosted auth provider sessions

Sign-in uses the provider's OAuth PKCE flow. The resulting tokens are kept
in the Flask (cookie) session under SESSION_KEY.
"""

import base64
import hashlib
import logging
import secrets
from urllib.parse import urlencode

import requests
from flask import session

from models import AuthSession

logger = logging.getLogger(__name__)


class AuthProviderError(Exception):
    """The auth provider rejected a request or could not be reached"""


class SessionManager:
    """Session lookup and sign-in/sign-out against the hosted provider"""

    SESSION_KEY = 'auth_session'
    VERIFIER_KEY = 'auth_code_verifier'

    def __init__(self, auth_url, anon_key, provider='google', timeout=30, http=None):
        self.auth_url = (auth_url or '').rstrip('/')
        self.anon_key = anon_key
        self.provider = provider
        self.timeout = timeout
        self.http = http or requests.Session()

    def _headers(self, token=None):
        headers = {'apikey': self.anon_key}
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def _token_request(self, grant_type, payload):
        try:
            response = self.http.post(
                f"{self.auth_url}/auth/v1/token",
                params={'grant_type': grant_type},
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthProviderError(f"Auth provider unreachable: {e}")

        if not response.ok:
            try:
                data = response.json()
                if not isinstance(data, dict):
                    data = {}
                message = data.get('error_description') or data.get('msg') or data.get('error')
            except ValueError:
                message = None
            raise AuthProviderError(message or f"Auth provider returned {response.status_code}")

        try:
            auth_session = AuthSession.from_token_response(response.json())
        except ValueError:
            raise AuthProviderError('Invalid token response from auth provider')
        if not auth_session.access_token:
            raise AuthProviderError('Token response carried no access token')
        return auth_session

    def _store(self, auth_session):
        session[self.SESSION_KEY] = auth_session.to_dict()
        session.permanent = True

    def build_sign_in_url(self, redirect_to):
        """Authorize URL for the configured provider; remembers the PKCE verifier"""
        verifier = secrets.token_urlsafe(64)
        session[self.VERIFIER_KEY] = verifier
        challenge = base64.urlsafe_b64encode(
            hashlib.sha256(verifier.encode('ascii')).digest()
        ).rstrip(b'=').decode('ascii')
        params = {
            'provider': self.provider,
            'redirect_to': redirect_to,
            'code_challenge': challenge,
            'code_challenge_method': 's256',
        }
        return f"{self.auth_url}/auth/v1/authorize?{urlencode(params)}"

    def exchange_code_for_session(self, code):
        """Trade the callback code for a session and store it"""
        verifier = session.pop(self.VERIFIER_KEY, None)
        auth_session = self._token_request('pkce', {'auth_code': code, 'code_verifier': verifier})
        self._store(auth_session)
        logger.info(f"Session established for {auth_session.email}")
        return auth_session

    def get_session(self):
        """Current AuthSession or None; an expired token is refreshed once"""
        raw = session.get(self.SESSION_KEY)
        if not raw:
            return None

        auth_session = AuthSession.from_dict(raw)
        if not auth_session.access_token:
            session.pop(self.SESSION_KEY, None)
            return None

        if auth_session.is_expired():
            if not auth_session.refresh_token:
                session.pop(self.SESSION_KEY, None)
                return None
            try:
                auth_session = self._token_request(
                    'refresh_token', {'refresh_token': auth_session.refresh_token}
                )
            except AuthProviderError as e:
                logger.warning(f"Session refresh failed, signing out: {e}")
                session.pop(self.SESSION_KEY, None)
                return None
            self._store(auth_session)
        return auth_session

    def sign_out(self):
        """Drop the local session and revoke it at the provider"""
        raw = session.pop(self.SESSION_KEY, None)
        session.pop(self.VERIFIER_KEY, None)
        token = raw.get('access_token') if raw else None
        if not token:
            return
        try:
            self.http.post(
                f"{self.auth_url}/auth/v1/logout",
                headers=self._headers(token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Provider sign-out failed: {e}")
