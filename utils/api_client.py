#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Backend API client (events, fests, registrations)
"""

import logging

import requests

logger = logging.getLogger(__name__)


class BackendAPIError(Exception):
    """A backend call failed; message is safe to show to the user"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BackendClient:
    """Thin wrapper over the backend's REST endpoints"""

    def __init__(self, base_url, timeout=30, http=None):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()

    def _url(self, path):
        if not self.base_url:
            raise BackendAPIError('API endpoint is not configured.')
        return f"{self.base_url}{path}"

    def _get(self, path, params=None):
        try:
            return self.http.get(self._url(path), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"GET {path} failed: {e}")
            raise BackendAPIError(f"Could not reach the server: {e}")

    @staticmethod
    def _json(response):
        try:
            return response.json()
        except ValueError:
            raise BackendAPIError('Unexpected response format from server.', response.status_code)

    # ==================== events ====================

    def get_events(self):
        """All events, newest first (backend order)"""
        response = self._get('/api/events')
        if not response.ok:
            raise BackendAPIError(f"Failed to fetch events (status: {response.status_code})", response.status_code)
        data = self._json(response)
        events = data.get('events') if isinstance(data, dict) else None
        if not isinstance(events, list):
            return []
        return [row for row in events if isinstance(row, dict)]

    def get_event(self, event_id):
        response = self._get(f"/api/events/{event_id}")
        if response.status_code == 404:
            raise BackendAPIError(f"Event with ID '{event_id}' not found.", 404)
        if not response.ok:
            raise BackendAPIError(f"Failed to fetch event data (status: {response.status_code})", response.status_code)
        data = self._json(response)
        event = data.get('event') if isinstance(data, dict) else None
        if not event:
            raise BackendAPIError('Event data not found in API response.', response.status_code)
        return event

    def send_event_form(self, fields, files, token, event_id=None):
        """POST (create) or PUT (edit) the multipart event form.

        Returns the raw response; status handling is the caller's job.
        """
        method = 'PUT' if event_id else 'POST'
        path = f"/api/events/{event_id}" if event_id else '/api/events'
        return self.http.request(
            method,
            self._url(path),
            headers={'Authorization': f'Bearer {token}'},
            data=fields,
            files=files or None,
            timeout=self.timeout,
        )

    def delete_event(self, event_id, token):
        return self._authorized('DELETE', f"/api/events/{event_id}", token, 'Failed to delete event.')

    def close_registrations(self, event_id, token):
        """Move the deadline into the past so no new registrations are accepted"""
        return self._authorized('POST', f"/api/events/{event_id}/close", token, 'Failed to close registration.')

    def _authorized(self, method, path, token, fallback_message):
        """Bearer-token call that only needs the JSON body back"""
        try:
            response = self.http.request(
                method,
                self._url(path),
                headers={'Authorization': f'Bearer {token}'},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise BackendAPIError(f"Could not reach the server: {e}")
        if not response.ok:
            try:
                error_data = response.json()
                message = (error_data.get('error') if isinstance(error_data, dict) else None) or fallback_message
            except ValueError:
                message = f"{fallback_message} (status: {response.status_code})"
            raise BackendAPIError(message, response.status_code)
        try:
            data = response.json()
        except ValueError:
            data = {}
        return data if isinstance(data, dict) else {}

    # ==================== fests ====================

    def get_fests(self):
        response = self._get('/api/fests')
        if not response.ok:
            raise BackendAPIError(f"Failed to fetch fests (status: {response.status_code})", response.status_code)
        data = self._json(response)
        fests = data.get('fests') if isinstance(data, dict) else None
        if not isinstance(fests, list):
            raise BackendAPIError('Unexpected fest data format from server.', response.status_code)
        return fests

    def get_fest(self, fest_slug):
        response = self._get(f"/api/fests/{fest_slug}")
        if response.status_code == 404:
            raise BackendAPIError(f"Fest with ID '{fest_slug}' not found.", 404)
        if not response.ok:
            raise BackendAPIError(f"Failed to fetch fest data (status: {response.status_code})", response.status_code)
        data = self._json(response)
        fest = data.get('fest') if isinstance(data, dict) else None
        if not fest:
            raise BackendAPIError('Fest data not found in API response.', response.status_code)
        return fest

    def send_fest_form(self, fields, files, token, fest_id=None):
        """POST (create) or PUT (edit) the multipart fest form; returns the raw response"""
        method = 'PUT' if fest_id else 'POST'
        path = f"/api/fests/{fest_id}" if fest_id else '/api/fests'
        return self.http.request(
            method,
            self._url(path),
            headers={'Authorization': f'Bearer {token}'},
            data=fields,
            files=files or None,
            timeout=self.timeout,
        )

    def delete_fest(self, fest_id, token):
        return self._authorized('DELETE', f"/api/fests/{fest_id}", token, 'Failed to delete fest.')

    # ==================== registrations ====================

    def get_registrations(self, event_id):
        """Registrant rows for an event ({users: [...]})"""
        response = self._get('/api/registrations', params={'event_id': event_id})
        if not response.ok:
            try:
                error_data = response.json()
                if not isinstance(error_data, dict):
                    error_data = {}
                message = f"Server Error: {error_data.get('details') or error_data.get('error') or 'Unknown error'}"
            except ValueError:
                message = f"Error {response.status_code}: Failed to retrieve data. {response.text[:150]}"
            raise BackendAPIError(message, response.status_code)
        data = self._json(response)
        users = data.get('users') if isinstance(data, dict) else None
        return users or []

    def register_for_event(self, event_id, register_numbers, team_name=None):
        payload = {
            'eventId': event_id,
            'teamName': team_name or None,
            'teammates': [{'registerNumber': number} for number in register_numbers],
        }
        try:
            response = self.http.post(self._url('/api/register'), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"POST /api/register failed: {e}")
            raise BackendAPIError(f"Could not reach the server: {e}")
        if not response.ok:
            try:
                error_data = response.json()
                message = (error_data.get('error') if isinstance(error_data, dict) else None) or 'Registration failed.'
            except ValueError:
                message = f"Registration failed (status: {response.status_code})"
            raise BackendAPIError(message, response.status_code)
        return self._json(response)

    def get_user_events(self, register_number):
        """Events a student registered for: [{id, name, date, department}]"""
        response = self._get(f"/api/registrations/user/{register_number}/events")
        if not response.ok:
            raise BackendAPIError(f"Failed to fetch registered events (status: {response.status_code})", response.status_code)
        data = self._json(response)
        events = data.get('events') if isinstance(data, dict) else None
        if not isinstance(events, list):
            return []
        return [row for row in events if isinstance(row, dict)]
