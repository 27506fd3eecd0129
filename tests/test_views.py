from io import BytesIO
from urllib.parse import urlparse

from openpyxl import load_workbook

from conftest import BROKEN, ORGANISER, STUDENT, FakeResponse
from models import AppUser, AuthSession
from session_manager import AuthProviderError
from utils.api_client import BackendAPIError


def location(response):
    parsed = urlparse(response.headers['Location'])
    return f"{parsed.path}?{parsed.query}" if parsed.query else parsed.path


def registrations():
    return [
        {'registration_id': 1, 'name': 'Asha Menon', 'register_number': '2341234',
         'email': 'asha@christuniversity.in', 'course': 'BCA', 'department': 'Computer Science'},
        {'registration_id': 2, 'name': 'Rahul Nair', 'register_number': '2345678',
         'email': 'rahul@christuniversity.in', 'course': 'BCom', 'department': 'Commerce'},
    ]


def event_form(**overrides):
    data = {
        'eventTitle': 'Robotics Workshop',
        'eventDate': '2099-04-10',
        'eventTime': '10:00',
        'endDate': '2099-04-10',
        'detailedDescription': 'Build a line follower.',
        'department': ['dept_computer_science_sci', 'dept_physics_electronics'],
        'organizingDept': 'dept_computer_science_sci',
        'category': 'innovation',
        'festEvent': 'none',
        'registrationDeadline': '2099-04-01',
        'location': 'Lab 3',
        'registrationFee': '',
        'maxParticipants': '2',
        'contactEmail': ORGANISER,
        'contactPhone': '9876543210',
        'whatsappLink': '',
        'rules': ['Bring a laptop', ''],
        'prizes': [''],
        'scheduleTime': ['10:00', ''],
        'scheduleActivity': ['Welcome', ''],
    }
    data.update(overrides)
    return data


# ==================== access gate ====================

def test_anonymous_private_page_redirects_to_auth(client):
    response = client.get('/discover')

    assert response.status_code == 302
    assert location(response) == '/auth'


def test_anonymous_privileged_page_redirects_to_auth(client, permission_calls):
    response = client.get('/manage/events')

    assert location(response) == '/auth'
    assert permission_calls == []


def test_public_pages_need_no_session(client):
    assert client.get('/').status_code == 200
    assert client.get('/about').status_code == 200
    assert client.get('/auth').status_code == 200


def test_non_organiser_is_sent_to_error(client, login):
    login(STUDENT)

    response = client.get('/manage')

    assert location(response) == '/error?error=not_authorized'


def test_permission_lookup_failure_is_denied(client, login):
    login(BROKEN)

    response = client.get('/create/event')

    assert location(response) == '/error?error=not_authorized'


def test_organiser_passes_the_gate_on_manage_subpaths(client, login, permission_calls):
    login(ORGANISER)

    response = client.get('/manage/events')

    assert response.status_code == 404
    assert permission_calls == [ORGANISER]


def test_non_organiser_on_manage_subpath(client, login):
    login(STUDENT)

    assert location(client.get('/manage/events')) == '/error?error=not_authorized'


def test_organiser_reaches_manage(client, login):
    login(ORGANISER)

    response = client.get('/manage')

    assert response.status_code == 200
    assert b'Campus Hackathon' in response.data
    assert b'Poetry Slam' not in response.data
    assert b'Tech Fest 2099' in response.data


def test_assets_skip_session_lookup(client, session_manager):
    client.get('/static/style.css')
    client.get('/logo.png')

    assert session_manager.get_session_calls == 0


def test_error_page_messages(client):
    assert b'university e-mail' in client.get('/error?error=invalid_domain').data
    assert b'Only event organisers' in client.get('/error?error=not_authorized').data


# ==================== auth ====================

def test_sign_in_redirects_to_provider(client):
    response = client.post('/auth')

    assert response.headers['Location'].startswith('http://auth.test/auth/v1/authorize')


def test_callback_without_code(client):
    assert location(client.get('/auth/callback')) == '/?error=no_code'


def test_callback_exchange_failure(client, session_manager):
    session_manager.exchange_error = AuthProviderError('invalid grant')

    assert location(client.get('/auth/callback?code=abc')) == '/?error=auth_exchange_failed'


def test_callback_without_email(client, session_manager):
    session_manager.exchange_result = AuthSession('token', email=None)

    assert location(client.get('/auth/callback?code=abc')) == '/?error=auth_incomplete'
    assert session_manager.signed_out


def test_callback_rejects_other_domains(client, session_manager):
    session_manager.exchange_result = AuthSession('token', email='someone@gmail.com')

    assert location(client.get('/auth/callback?code=abc')) == '/error?error=invalid_domain'
    assert session_manager.signed_out


def test_callback_rejects_lookalike_domain(client, session_manager, db_manager):
    session_manager.exchange_result = AuthSession('token', email='x@evilchristuniversity.in')

    assert location(client.get('/auth/callback?code=abc')) == '/error?error=invalid_domain'
    assert session_manager.signed_out
    assert db_manager.users == {}


def test_callback_success_records_user(client, session_manager, db_manager):
    session_manager.exchange_result = AuthSession(
        'token', email=STUDENT, user={'email': STUDENT, 'user_metadata': {'full_name': 'Asha Menon 2341234'}}
    )

    assert location(client.get('/auth/callback?code=abc')) == '/discover'
    assert STUDENT in db_manager.users


def test_callback_unexpected_error(client, session_manager, db_manager):
    session_manager.exchange_error = RuntimeError('boom')

    assert location(client.get('/auth/callback?code=abc')) == '/?error=callback_exception'
    assert session_manager.signed_out


def test_logout(client, login, session_manager):
    login(STUDENT)

    response = client.post('/auth/logout')

    assert location(response) == '/'
    assert session_manager.signed_out


# ==================== events ====================

def test_events_list_filters(client, login):
    login()

    response = client.get('/events?category=literary')
    assert b'Poetry Slam' in response.data
    assert b'Campus Hackathon' not in response.data

    response = client.get('/events?q=hack')
    assert b'Campus Hackathon' in response.data
    assert b'Poetry Slam' not in response.data


def test_event_detail(client, login):
    login()

    response = client.get('/event/hackathon-2099')

    assert response.status_code == 200
    assert b'Kick-off' in response.data
    assert b'Bring your laptop' in response.data


def test_missing_event(client, login):
    login()

    response = client.get('/event/unknown')

    assert response.status_code == 404
    assert b'not found' in response.data


def test_event_list_is_cached(client, login, backend):
    login()

    client.get('/events')
    client.get('/events')

    assert backend.get_events_calls == 1


def test_create_event_validation_error(client, login, backend):
    login(ORGANISER)

    response = client.post('/create/event', data=event_form(endDate='2099-04-09'))

    assert response.status_code == 400
    assert b'End date cannot be before event date' in response.data
    assert backend.sent_forms == []


def test_create_event_submits_and_invalidates_cache(client, login, backend):
    login(ORGANISER)
    client.get('/events')

    response = client.post('/create/event', data=event_form())

    assert location(response) == '/event/new-event'
    fields = dict(backend.sent_forms[0]['fields'])
    assert fields['eventTitle'] == 'Robotics Workshop'
    assert fields['rules'] == '[{"value": "Bring a laptop"}]'
    assert fields['scheduleItems'] == '[{"time": "10:00", "activity": "Welcome"}]'
    assert 'festEvent' not in fields
    assert backend.sent_forms[0]['token'] == 'access-token'

    client.get('/events')
    assert backend.get_events_calls == 2


def test_create_event_backend_rejection(client, login, backend):
    login(ORGANISER)
    backend.form_response = FakeResponse(400, {'error': 'Duplicate title'}, reason='Bad Request')

    response = client.post('/create/event', data=event_form())

    assert response.status_code == 400
    assert b'Failed to create event. Duplicate title' in response.data


def test_edit_event_prefills_form(client, login):
    login(ORGANISER)

    response = client.get('/edit/event/hackathon-2099')

    assert response.status_code == 200
    assert b'value="Campus Hackathon"' in response.data


def test_edit_event_updates(client, login, backend):
    login(ORGANISER)

    response = client.post('/edit/event/hackathon-2099', data=event_form())

    assert backend.sent_forms[0]['event_id'] == 'hackathon-2099'
    assert response.status_code == 302


def test_register_validates_register_numbers(client, login, backend):
    login()

    response = client.post('/event/hackathon-2099/register', data={'registerNumber': ['12345']})

    assert response.status_code == 400
    assert b'must be exactly 7 digits' in response.data
    assert backend.registered == []


def test_register_success(client, login, backend):
    login()

    response = client.post('/event/hackathon-2099/register',
                           data={'teamName': 'Byte Me', 'registerNumber': ['2341234', '2345678']})

    assert location(response) == '/event/hackathon-2099'
    assert backend.registered == [('hackathon-2099', ['2341234', '2345678'], 'Byte Me')]


# ==================== participants ====================

def test_participants_search(client, login, backend):
    login(ORGANISER)
    backend.registrations['hackathon-2099'] = registrations()

    response = client.get('/event/hackathon-2099/participants?q=asha')

    assert b'Asha Menon' in response.data
    assert b'Rahul Nair' not in response.data


def test_participants_export(client, login, backend):
    login(ORGANISER)
    backend.registrations['hackathon-2099'] = registrations()

    response = client.get('/event/hackathon-2099/participants/export')

    assert response.status_code == 200
    assert 'participants-hackathon-2099.xlsx' in response.headers['Content-Disposition']
    sheet = load_workbook(BytesIO(response.data))['Participants']
    assert sheet['A2'].value == 'Asha Menon'


def test_export_without_participants(client, login):
    login(ORGANISER)

    response = client.get('/event/hackathon-2099/participants/export')

    assert location(response) == '/event/hackathon-2099/participants'


# ==================== fests and clubs ====================

def test_fest_detail_lists_member_events(client, login):
    login()

    response = client.get('/fest/tech-fest-2099')

    assert response.status_code == 200
    assert b'Campus Hackathon' in response.data
    assert b'Poetry Slam' not in response.data
    assert b'Mar 10, 2099' in response.data
    assert b'N/A' in response.data


def test_missing_fest(client, login):
    login()

    response = client.get('/fest/unknown')

    assert response.status_code == 404
    assert b'not found' in response.data


def test_clubs_filter(client, login):
    login()

    response = client.get('/clubs?filter=Research')

    assert b'CNRI' in response.data
    assert b'CAI' in response.data
    assert b'CAPS' not in response.data


def test_club_detail(client, login):
    login()

    assert b'Technology Innovation Club' in client.get('/club/1').data
    assert client.get('/club/99').status_code == 404


def test_home_and_discover_show_upcoming_events(client, login):
    assert b'Campus Hackathon' in client.get('/').data

    login()
    response = client.get('/discover')
    assert response.status_code == 200
    assert b'Poetry Slam' in response.data
    assert b'Tech Fest 2099' in response.data
    assert b'CNRI' in response.data


# ==================== organiser actions ====================

def test_delete_event(client, login, backend):
    login(ORGANISER)

    response = client.post('/edit/event/hackathon-2099/delete')

    assert location(response) == '/manage'
    assert backend.actions == [('delete_event', 'hackathon-2099', 'access-token')]


def test_delete_event_requires_organiser(client, login, backend):
    login(STUDENT)

    assert location(client.post('/edit/event/hackathon-2099/delete')) == '/error?error=not_authorized'
    assert backend.actions == []


def test_delete_event_backend_refusal(client, login, backend):
    login(ORGANISER)
    backend.action_error = BackendAPIError('Forbidden: You are not the creator of this event.', 403)

    response = client.post('/edit/event/hackathon-2099/delete', follow_redirects=True)

    assert b'Forbidden: You are not the creator of this event.' in response.data


def test_close_registrations_refreshes_event_list(client, login, backend):
    login(ORGANISER)
    client.get('/events')

    response = client.post('/edit/event/hackathon-2099/close')

    assert location(response) == '/edit/event/hackathon-2099'
    assert backend.actions == [('close_registrations', 'hackathon-2099', 'access-token')]
    client.get('/events')
    assert backend.get_events_calls == 2


def fest_form(**overrides):
    data = {
        'title': 'Tech Fest 2099',
        'openingDate': '2099-03-10',
        'closingDate': '2099-03-12',
        'detailedDescription': 'Annual technology festival',
        'department': 'dept_computer_science_sci',
        'category': 'technology',
        'contactEmail': 'fest@christuniversity.in',
        'contactPhone': '9876543210',
        'organizingDept': 'Computer Science',
        'eventHeads': ['head@christuniversity.in', ''],
    }
    data.update(overrides)
    return data


def test_create_fest(client, login, backend):
    login(ORGANISER)
    form = fest_form(festImage=(BytesIO(b'png'), 'fest.png', 'image/png'))

    response = client.post('/create/fest', data=form, content_type='multipart/form-data')

    assert location(response) == '/fest/new-fest'
    sent = backend.fest_forms[0]
    assert sent['fest_id'] is None
    assert sent['token'] == 'access-token'
    assert ('event_heads', '["head@christuniversity.in"]') in sent['fields']
    assert 'festImage' in sent['files']


def test_create_fest_needs_image(client, login, backend):
    login(ORGANISER)

    response = client.post('/create/fest', data=fest_form())

    assert response.status_code == 400
    assert b'Fest image is required' in response.data
    assert backend.fest_forms == []


def test_edit_fest_prefills_and_updates(client, login, backend):
    login(ORGANISER)

    page = client.get('/edit/fest/tech-fest-2099')
    assert page.status_code == 200
    assert b'value="Tech Fest 2099"' in page.data

    backend.fest_form_response = FakeResponse(200, {'message': 'Fest updated'})
    response = client.post('/edit/fest/tech-fest-2099', data=fest_form(detailedDescription='Updated'))

    assert location(response) == '/fest/tech-fest-2099'
    assert backend.fest_forms[0]['fest_id'] == 'tech-fest-2099'
    assert backend.fest_forms[0]['files'] == {}


def test_fest_pages_are_organiser_only(client, login):
    login(STUDENT)

    assert location(client.get('/create/fest')) == '/error?error=not_authorized'
    assert location(client.get('/edit/fest/tech-fest-2099')) == '/error?error=not_authorized'


def test_delete_fest(client, login, backend):
    login(ORGANISER)

    response = client.post('/edit/fest/tech-fest-2099/delete')

    assert location(response) == '/manage'
    assert backend.actions == [('delete_fest', 'tech-fest-2099', 'access-token')]


# ==================== profile ====================

def test_profile_marks_upcoming_and_completed(client, login, backend, db_manager):
    login(STUDENT)
    db_manager.users[STUDENT] = AppUser(email=STUDENT, name='Asha Menon', register_number='2341234')
    backend.user_events['2341234'] = [
        {'id': 'hackathon-2099', 'name': 'Campus Hackathon', 'date': '2099-03-10', 'department': 'CS'},
        {'id': 'old-quiz', 'name': 'Old Quiz', 'date': '2001-01-05', 'department': 'Maths'},
    ]

    response = client.get('/profile')

    assert response.status_code == 200
    assert b'Asha Menon' in response.data
    assert b'status-upcoming' in response.data
    assert b'status-completed' in response.data
    assert b'March 10, 2099' in response.data


def test_profile_without_register_number(client, login, db_manager):
    login(STUDENT)
    db_manager.users[STUDENT] = AppUser(email=STUDENT, name='Asha Menon')

    response = client.get('/profile')

    assert response.status_code == 200
    assert b'You have not registered for any events yet.' in response.data


def test_profile_requires_session(client):
    assert location(client.get('/profile')) == '/auth'


def test_profile_unknown_user(client, login):
    login(STUDENT)

    assert client.get('/profile').status_code == 404