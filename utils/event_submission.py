#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Event and fest form submission: validated form data -> multipart request to the backend
"""

import json
import logging

import requests
from flask import flash
from werkzeug.datastructures import FileStorage

from utils.api_client import BackendAPIError

logger = logging.getLogger(__name__)

SCALAR_FIELDS = [
    'eventTitle', 'eventDate', 'endDate', 'eventTime', 'detailedDescription',
    'organizingDept', 'category', 'festEvent', 'registrationDeadline', 'location',
    'registrationFee', 'maxParticipants', 'contactEmail', 'contactPhone', 'whatsappLink',
]
FLAG_FIELDS = ['provideClaims', 'sendNotifications']
JSON_FIELDS = ['department', 'scheduleItems', 'rules', 'prizes', 'eventHeads']
FILE_FIELDS = ['imageFile', 'bannerFile', 'pdfFile']

FEST_SCALAR_FIELDS = [
    'title', 'opening_date', 'closing_date', 'detailed_description', 'category',
    'contact_email', 'contact_phone', 'organizing_dept',
]
FEST_JSON_FIELDS = ['department', 'event_heads']
FEST_FILE_FIELD = 'festImage'


class EventSubmissionError(Exception):
    """Submission failed; message is the most specific one available"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SubmissionAuthError(EventSubmissionError):
    """No usable session to take a bearer token from"""


def _flash_error(message):
    flash(message, 'error')


def build_event_payload(form_data):
    """Split form data into multipart fields and files.

    - scalars are sent only when non-empty
    - flags are always sent as 'true'/'false'
    - lists are JSON-encoded; dicts only when non-empty
    - files are attached only when they are real uploads
    """
    fields = []
    for key in SCALAR_FIELDS:
        value = form_data.get(key)
        if value is not None and str(value).strip() != '':
            fields.append((key, str(value)))

    for key in FLAG_FIELDS:
        fields.append((key, 'true' if form_data.get(key) else 'false'))

    for key in JSON_FIELDS:
        value = form_data.get(key)
        if isinstance(value, list) or (isinstance(value, dict) and value):
            fields.append((key, json.dumps(value)))

    files = {}
    for key in FILE_FIELDS:
        _attach(files, key, form_data.get(key))
    return fields, files


def _attach(files, key, file):
    if isinstance(file, FileStorage) and file.filename:
        file.stream.seek(0)
        files[key] = (file.filename, file.stream, file.mimetype)
    elif file:
        logger.warning(f"{key} is present but not an uploaded file: {file!r}")


def build_fest_payload(form_data):
    """Multipart fields and files for the fest form; lists always go as JSON"""
    fields = []
    for key in FEST_SCALAR_FIELDS:
        value = form_data.get(key)
        if value is not None and str(value).strip() != '':
            fields.append((key, str(value)))
    for key in FEST_JSON_FIELDS:
        fields.append((key, json.dumps(list(form_data.get(key) or []))))

    files = {}
    _attach(files, FEST_FILE_FIELD, form_data.get(FEST_FILE_FIELD))
    return fields, files


def extract_error_message(response):
    """Most specific error message a failed backend response offers"""
    try:
        error_data = response.json()
        if not isinstance(error_data, dict):
            error_data = {}
    except ValueError:
        logger.error(f"Could not parse error response as JSON. Raw text: {response.text}")
        return (
            f"Failed to parse error response from server. "
            f"Status: {response.status_code}, StatusText: {response.reason}. "
            f"Response body: {response.text}"
        )

    details = error_data.get('details')
    return (
        error_data.get('error')
        or error_data.get('message')
        or (details if isinstance(details, str) else None)
        or error_data.get('detail')
        or f"Server error: {response.status_code} {response.reason}"
    )


class EventSubmitter:
    """Posts validated event forms to the backend with the session's token.

    is_submitting is True only while submit() runs.
    """

    noun = 'event'

    def __init__(self, backend, session_manager, alert=None):
        self.backend = backend
        self.session_manager = session_manager
        self.alert = alert or _flash_error
        self.is_submitting = False

    def _get_token(self):
        try:
            auth_session = self.session_manager.get_session()
        except Exception as e:
            logger.error(f"Unexpected error getting session: {e}")
            self.alert(str(e) or 'An unexpected error occurred while verifying your session.')
            raise SubmissionAuthError(str(e) or 'User not authenticated.')

        if auth_session is None or not auth_session.access_token:
            self.alert('Authentication error or no active session. Please log in.')
            raise SubmissionAuthError('User not authenticated.', 401)
        return auth_session.access_token

    def _build_payload(self, form_data):
        return build_event_payload(form_data)

    def _send(self, fields, files, token, record_id):
        return self.backend.send_event_form(fields, files, token, event_id=record_id)

    def submit(self, form_data, event_id=None):
        """Create (or, with event_id, update) an event; returns the response JSON"""
        return self._submit(form_data, event_id)

    def _submit(self, form_data, record_id):
        action = 'update' if record_id else 'create'
        self.is_submitting = True
        try:
            token = self._get_token()
            fields, files = self._build_payload(form_data)
            logger.info(
                f"Submitting {self.noun} ({action}): fields={[key for key, _ in fields]}, "
                f"files={list(files.keys())}"
            )

            try:
                response = self._send(fields, files, token, record_id)
            except requests.RequestException as e:
                raise EventSubmissionError(f"Could not reach the server: {e}")
            except BackendAPIError as e:
                raise EventSubmissionError(e.message, e.status_code)

            if not response.ok:
                message = extract_error_message(response)
                logger.error(f"{self.noun.capitalize()} {action} rejected ({response.status_code}): {message}")
                raise EventSubmissionError(message, response.status_code)

            try:
                result = response.json()
            except ValueError:
                result = {}
            logger.info(f"{self.noun.capitalize()} {action} succeeded: {result.get('message', '') if isinstance(result, dict) else ''}")
            return result
        except SubmissionAuthError:
            raise
        except EventSubmissionError as e:
            self.alert(f"Failed to {action} {self.noun}. {e.message or 'An unknown error occurred.'}")
            raise
        finally:
            self.is_submitting = False


class FestSubmitter(EventSubmitter):
    """Same flow as EventSubmitter against the /api/fests endpoints"""

    noun = 'fest'

    def _build_payload(self, form_data):
        return build_fest_payload(form_data)

    def _send(self, fields, files, token, record_id):
        return self.backend.send_fest_form(fields, files, token, fest_id=record_id)

    def submit(self, form_data, fest_id=None):
        return self._submit(form_data, fest_id)
