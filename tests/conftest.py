import os

os.environ['APP_ENV'] = 'testing'

import pytest

from app import create_app
from models import AppUser, AuthSession
from utils.api_client import BackendAPIError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason='OK'):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload
        self.text = text if text is not None else ''
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload


class FakeBackend:
    """In-memory stand-in for BackendClient"""

    def __init__(self, events=None, fests=None, registrations=None):
        self.events = events or []
        self.fests = fests or []
        self.registrations = registrations or {}
        self.get_events_calls = 0
        self.sent_forms = []
        self.registered = []
        self.form_response = FakeResponse(201, {'message': 'Event created', 'event': {'event_id': 'new-event'}})
        self.fest_forms = []
        self.fest_form_response = FakeResponse(201, {'message': 'Fest created', 'fest': {'fest_id': 'new-fest'}})
        self.actions = []
        self.action_error = None
        self.user_events = {}
        self.user_events_error = None
        self.fail_with = None

    def get_events(self):
        self.get_events_calls += 1
        if self.fail_with:
            raise self.fail_with
        return list(self.events)

    def get_event(self, event_id):
        for event in self.events:
            if str(event.get('event_id')) == str(event_id):
                return event
        raise BackendAPIError(f"Event with ID '{event_id}' not found.", 404)

    def get_fests(self):
        return list(self.fests)

    def get_fest(self, fest_slug):
        for fest in self.fests:
            if fest.get('fest_id') == fest_slug:
                return fest
        raise BackendAPIError(f"Fest with ID '{fest_slug}' not found.", 404)

    def get_registrations(self, event_id):
        return list(self.registrations.get(event_id, []))

    def register_for_event(self, event_id, register_numbers, team_name=None):
        self.registered.append((event_id, list(register_numbers), team_name))
        return {'message': 'Registered'}

    def send_event_form(self, fields, files, token, event_id=None):
        self.sent_forms.append({'fields': fields, 'files': files, 'token': token, 'event_id': event_id})
        return self.form_response

    def send_fest_form(self, fields, files, token, fest_id=None):
        self.fest_forms.append({'fields': fields, 'files': files, 'token': token, 'fest_id': fest_id})
        return self.fest_form_response

    def _action(self, name, record_id, token, message):
        self.actions.append((name, record_id, token))
        if self.action_error:
            raise self.action_error
        return {'message': message}

    def delete_event(self, event_id, token):
        return self._action('delete_event', event_id, token, 'Event deleted successfully.')

    def close_registrations(self, event_id, token):
        return self._action('close_registrations', event_id, token, 'Registration closed successfully.')

    def delete_fest(self, fest_id, token):
        return self._action('delete_fest', fest_id, token, 'Fest deleted successfully.')

    def get_user_events(self, register_number):
        if self.user_events_error:
            raise self.user_events_error
        return list(self.user_events.get(register_number, []))


class FakeSessionManager:
    """Stand-in for SessionManager; the session lives on the object"""

    def __init__(self):
        self.auth_session = None
        self.get_session_calls = 0
        self.signed_out = False
        self.exchange_result = None
        self.exchange_error = None

    def get_session(self):
        self.get_session_calls += 1
        return self.auth_session

    def build_sign_in_url(self, redirect_to):
        return f"http://auth.test/auth/v1/authorize?redirect_to={redirect_to}"

    def exchange_code_for_session(self, code):
        if self.exchange_error:
            raise self.exchange_error
        self.auth_session = self.exchange_result
        return self.exchange_result

    def sign_out(self):
        self.signed_out = True
        self.auth_session = None


class FakeDbManager:
    def __init__(self):
        self.users = {}
        self.fail_with = None

    def get_user_by_email(self, email):
        if self.fail_with:
            raise self.fail_with
        return self.users.get(email)

    def ensure_user(self, auth_user):
        email = auth_user['email']
        if email in self.users:
            return self.users[email], False
        user = AppUser(email=email, name=auth_user.get('name'))
        self.users[email] = user
        return user, True


ORGANISER = 'organiser@christuniversity.in'
STUDENT = 'student@christuniversity.in'
BROKEN = 'broken@christuniversity.in'


def sample_events():
    return [
        {
            'event_id': 'hackathon-2099',
            'title': 'Campus Hackathon',
            'event_date': '2099-03-10',
            'event_time': '09:30:00',
            'end_date': '2099-03-11',
            'venue': 'Main Auditorium',
            'category': 'innovation',
            'fest': 'Tech Fest 2099',
            'registration_fee': 0,
            'participants_per_team': 3,
            'created_by': ORGANISER,
            'rules': '["Bring your laptop"]',
            'schedule': '[{"time": "09:30", "activity": "Kick-off"}]',
        },
        {
            'event_id': 'poetry-slam',
            'title': 'Poetry Slam',
            'event_date': '2099-01-05',
            'event_time': '17:00',
            'category': 'literary',
            'fest': None,
            'registration_fee': 50,
            'participants_per_team': 1,
            'created_by': 'someone@christuniversity.in',
        },
    ]


def sample_fests():
    return [
        {
            'fest_id': 'tech-fest-2099',
            'fest_title': 'Tech Fest 2099',
            'description': 'Annual technology festival',
            'opening_date': '2099-03-10',
            'closing_date': '2099-03-12',
            'contact_email': None,
            'contact_phone': None,
            'created_by': ORGANISER,
        },
    ]


@pytest.fixture
def backend():
    return FakeBackend(events=sample_events(), fests=sample_fests())


@pytest.fixture
def session_manager():
    return FakeSessionManager()


@pytest.fixture
def db_manager():
    return FakeDbManager()


@pytest.fixture
def permission_calls():
    return []


@pytest.fixture
def app(backend, session_manager, db_manager, permission_calls):
    organisers = {ORGANISER: True, STUDENT: False}

    def lookup(email):
        permission_calls.append(email)
        if email == BROKEN:
            raise RuntimeError('permissions database unavailable')
        return organisers.get(email)

    return create_app(
        'testing',
        backend=backend,
        session_manager=session_manager,
        permission_lookup=lookup,
        db_manager=db_manager,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(session_manager):
    def _login(email=STUDENT):
        session_manager.auth_session = AuthSession('access-token', email=email)
        return session_manager.auth_session
    return _login
