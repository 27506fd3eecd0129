from datetime import date
from io import BytesIO

from werkzeug.datastructures import FileStorage, MultiDict

from models import Fest
from utils.fest_form import fest_to_form_fields, fields_from_form, validate_fest_form

TODAY = date(2099, 1, 1)


def valid_fields(**overrides):
    fields = {
        'title': 'Tech Fest 2099',
        'openingDate': '2099-03-10',
        'closingDate': '2099-03-12',
        'detailedDescription': 'Annual technology festival',
        'department': ['dept_computer_science_sci'],
        'category': 'technology',
        'contactEmail': 'fest@christuniversity.in',
        'contactPhone': '+91 98765-43210',
        'organizingDept': 'Computer Science',
        'eventHeads': ['head@christuniversity.in'],
    }
    fields.update(overrides)
    return fields


def image(size=10, content_type='image/png'):
    return FileStorage(stream=BytesIO(b'x' * size), filename='fest.png', content_type=content_type)


def test_valid_fest_is_normalized():
    data, errors = validate_fest_form(valid_fields(), {'festImage': image()}, today=TODAY)

    assert errors == []
    assert data['opening_date'] == '2099-03-10'
    assert data['event_heads'] == ['head@christuniversity.in']
    assert data['contact_phone'] == '+91 98765-43210'
    assert data['festImage'].filename == 'fest.png'


def test_new_fest_requires_image_and_future_opening():
    _, errors = validate_fest_form(valid_fields(openingDate='2098-12-31'), today=TODAY)

    by_field = errors.by_field()
    assert by_field['festImage'] == ['Fest image is required']
    assert by_field['openingDate'] == ['Opening must be on or after today']


def test_edit_keeps_stored_image_and_past_opening():
    data, errors = validate_fest_form(valid_fields(openingDate='2098-12-31'), is_edit=True, today=TODAY)

    assert errors == []
    assert data['festImage'] is None


def test_closing_before_opening():
    _, errors = validate_fest_form(valid_fields(closingDate='2099-03-09'), {'festImage': image()}, today=TODAY)

    assert errors.by_field() == {'closingDate': ['Must be on/after opening date']}


def test_date_format():
    _, errors = validate_fest_form(valid_fields(openingDate='10/03/2099', closingDate=''), is_edit=True, today=TODAY)

    assert errors.by_field() == {
        'openingDate': ['Format YYYY-MM-DD'],
        'closingDate': ['Closing date is required'],
    }


def test_contact_and_head_checks():
    fields = valid_fields(contactPhone='12345', contactEmail='not-an-email',
                          eventHeads=['ok@christuniversity.in', 'nope'])
    _, errors = validate_fest_form(fields, is_edit=True, today=TODAY)

    by_field = errors.by_field()
    assert by_field['contactPhone'] == ['Must be 10-14 digits']
    assert by_field['contactEmail'] == ['Invalid email format']
    assert {'path': ['eventHeads', 1], 'message': 'Invalid email format.'} in errors


def test_image_limits():
    _, errors = validate_fest_form(valid_fields(), {'festImage': image(3 * 1024 * 1024 + 1)}, today=TODAY)
    assert errors.by_field()['festImage'] == ['Image file must be less than 3MB']

    _, errors = validate_fest_form(valid_fields(), {'festImage': image(content_type='image/gif')}, today=TODAY)
    assert errors.by_field()['festImage'] == ['Invalid file type. JPG/PNG only.']


def test_required_fields():
    _, errors = validate_fest_form({}, is_edit=True, today=TODAY)

    assert set(errors.by_field()) == {
        'title', 'openingDate', 'closingDate', 'detailedDescription', 'department',
        'category', 'contactEmail', 'contactPhone', 'organizingDept',
    }


def test_fields_from_form_drops_blank_heads():
    form = MultiDict([
        ('title', 'Tech Fest'),
        ('department', 'dept_commerce'),
        ('department', 'dept_languages'),
        ('eventHeads', 'a@christuniversity.in'),
        ('eventHeads', '  '),
    ])

    fields = fields_from_form(form)

    assert fields['department'] == ['dept_commerce', 'dept_languages']
    assert fields['eventHeads'] == ['a@christuniversity.in']


def test_fest_prefill_validates_as_edit():
    fest = Fest.from_api({
        'fest_id': 'tech-fest-2099',
        'fest_title': 'Tech Fest 2099',
        'description': 'Annual technology festival',
        'opening_date': '2099-03-10T00:00:00',
        'closing_date': '2099-03-12T00:00:00',
        'department_access': '["dept_commerce"]',
        'category': 'technology',
        'contact_email': 'fest@christuniversity.in',
        'contact_phone': '9876543210',
        'organizing_dept': 'Commerce',
        'event_heads': ['head@christuniversity.in'],
    })

    fields = fest_to_form_fields(fest)
    _, errors = validate_fest_form(fields, is_edit=True, today=TODAY)

    assert fields['openingDate'] == '2099-03-10'
    assert errors == []
