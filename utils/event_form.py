"""
Event creation form schema.

validate_event_form() checks the raw values posted by the create/edit event
page and returns either a normalized dict or a list of errors, each tagged
with the path of the offending field, e.g.::

    {'path': ['scheduleItems', 0, 'time'], 'message': 'Invalid time format (HH:MM)'}

Nothing is accepted partially: any error means no data.
"""

import json
import os
import re

from werkzeug.datastructures import FileStorage

from config import Config
from utils.helpers import parse_date, validate_email, validate_url

# Applied with fullmatch()
TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")
FEE_PATTERN = re.compile(r"\d+(\.\d{1,2})?")
PHONE_PATTERN = re.compile(r"\d{10}")
INTEGER_PATTERN = re.compile(r"\d+(\.0+)?")
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

# field -> (max size in bytes, accepted MIME types)
FILE_RULES = {
    'imageFile': (Config.MAX_FILE_SIZE_IMAGE, Config.ACCEPTED_IMAGE_TYPES),
    'bannerFile': (Config.MAX_FILE_SIZE_BANNER, Config.ACCEPTED_IMAGE_TYPES),
    'pdfFile': (Config.MAX_FILE_SIZE_PDF, Config.ACCEPTED_PDF_TYPES),
}

TRUE_VALUES = ('true', 'on', '1', 'yes')


class EventFormErrors(list):
    """Error list with a helper to group messages by top-level field"""

    def add(self, path, message):
        if isinstance(path, str):
            path = [path]
        self.append({'path': list(path), 'message': message})

    def by_field(self):
        grouped = {}
        for error in self:
            grouped.setdefault(str(error['path'][0]), []).append(error['message'])
        return grouped


def _get(fields, key):
    value = fields.get(key)
    if value is None:
        return None
    return value if isinstance(value, (list, dict, bool)) else str(value)


def _get_list(fields, key):
    """Read a list field: repeated form keys, a real list, or a JSON string"""
    if hasattr(fields, 'getlist'):
        values = fields.getlist(key)
        if len(values) == 1 and isinstance(values[0], str) and values[0].strip().startswith('['):
            return _decode_json_list(values[0])
        return values
    value = fields.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return _decode_json_list(value) if value.strip() else []
    return list(value)


def _decode_json_list(raw):
    try:
        parsed = json.loads(raw)
    except ValueError:
        return None
    return parsed if isinstance(parsed, list) else None


def _get_bool(fields, key):
    value = fields.get(key)
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


def _check_length(errors, key, value, minimum, maximum, required_message, max_message):
    if value is None or len(value) < minimum:
        errors.add(key, required_message)
    elif len(value) > maximum:
        errors.add(key, max_message)


def _check_date(errors, key, value, required_message):
    if not value:
        errors.add(key, required_message)
        return None
    parsed = parse_date(value) if isinstance(value, str) and DATE_PATTERN.fullmatch(value) else None
    if parsed is None:
        errors.add(key, 'Invalid date (YYYY-MM-DD)')
    return parsed


def file_size(file):
    """Size of an uploaded file in bytes; the stream position is preserved"""
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def _check_file(errors, key, file):
    """Return the FileStorage when present, else None"""
    if file is None or file == '':
        return None
    if not isinstance(file, FileStorage):
        errors.add(key, 'Invalid file upload.')
        return None
    if not file.filename:
        return None

    max_size, accepted = FILE_RULES[key]
    if file_size(file) > max_size:
        errors.add(key, f'Max file size is {max_size // (1024 * 1024)}MB.')
    if file.mimetype not in accepted:
        errors.add(key, f"Unsupported file type. Accepted: {', '.join(accepted)}")
    return file


def _check_value_list(errors, key, items, empty_message):
    if items is None:
        errors.add(key, 'Invalid list')
        return []
    cleaned = []
    for index, item in enumerate(items):
        value = item.get('value') if isinstance(item, dict) else item
        if not isinstance(value, str) or len(value) < 1:
            errors.add([key, index, 'value'], empty_message)
            continue
        cleaned.append({'value': value})
    return cleaned


def _check_schedule(errors, items):
    if items is None:
        errors.add('scheduleItems', 'Invalid list')
        return []
    cleaned = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.add(['scheduleItems', index], 'Invalid schedule item')
            continue
        time_value = str(item.get('time') or '')
        activity = str(item.get('activity') or '')
        if not TIME_PATTERN.fullmatch(time_value):
            errors.add(['scheduleItems', index, 'time'], 'Invalid time format (HH:MM)')
        if len(activity) < 1:
            errors.add(['scheduleItems', index, 'activity'], 'Activity is required')
        elif len(activity) > 200:
            errors.add(['scheduleItems', index, 'activity'], 'Max 200 chars')
        cleaned.append({'time': time_value, 'activity': activity})
    return cleaned


def _is_positive_integer(value):
    if not INTEGER_PATTERN.fullmatch(str(value)):
        return False
    return float(value) > 0


def fields_from_form(form):
    """Collect the HTML form's repeated inputs into validate_event_form() fields.

    The page renders one spare input per list, so fully blank rows are
    dropped here rather than reported as errors.
    """
    fields = {key: form.get(key) for key in form.keys()
              if key not in ('department', 'rules', 'prizes', 'scheduleTime', 'scheduleActivity')}
    fields['department'] = form.getlist('department')
    fields['rules'] = [{'value': value} for value in form.getlist('rules') if value.strip()]
    fields['prizes'] = [{'value': value} for value in form.getlist('prizes') if value.strip()]
    fields['scheduleItems'] = [
        {'time': time_value, 'activity': activity}
        for time_value, activity in zip(form.getlist('scheduleTime'), form.getlist('scheduleActivity'))
        if time_value.strip() or activity.strip()
    ]
    return fields


def validate_event_form(fields, files=None):
    """Validate raw event form values.

    Args:
        fields: request.form (MultiDict) or a plain dict
        files: request.files or a dict of FileStorage objects

    Returns:
        (data, errors): data is None whenever errors is non-empty
    """
    files = files or {}
    errors = EventFormErrors()

    title = _get(fields, 'eventTitle')
    _check_length(errors, 'eventTitle', title, 1, 100, 'Event title is required', 'Max 100 chars')

    event_date = _check_date(errors, 'eventDate', _get(fields, 'eventDate'), 'Event date is required')

    event_time = _get(fields, 'eventTime') or ''
    if not TIME_PATTERN.fullmatch(event_time):
        errors.add('eventTime', 'Invalid time format (HH:MM)')

    end_date = _check_date(errors, 'endDate', _get(fields, 'endDate'), 'End date is required')

    description = _get(fields, 'detailedDescription')
    _check_length(errors, 'detailedDescription', description, 1, 1000, 'Description is required', 'Max 1000 chars')

    departments = _get_list(fields, 'department')
    if departments is None:
        errors.add('department', 'Invalid list')
        departments = []
    elif len(departments) < 1:
        errors.add('department', 'At least one department is required')

    organizing_dept = _get(fields, 'organizingDept')
    if not organizing_dept:
        errors.add('organizingDept', 'Organizing department is required')

    category = _get(fields, 'category')
    if not category:
        errors.add('category', 'Category is required')

    fest_event = _get(fields, 'festEvent')
    if fest_event in ('', 'none'):
        fest_event = None

    deadline = _check_date(errors, 'registrationDeadline', _get(fields, 'registrationDeadline'), 'Deadline is required')

    location = _get(fields, 'location')
    _check_length(errors, 'location', location, 1, 200, 'Location is required', 'Max 200 chars')

    fee = _get(fields, 'registrationFee') or None
    if fee is not None and not FEE_PATTERN.fullmatch(str(fee)):
        errors.add('registrationFee', 'Invalid fee format. Enter a number (e.g., 0, 50, 100.50)')

    max_participants = _get(fields, 'maxParticipants') or None
    if max_participants is not None and not _is_positive_integer(max_participants):
        errors.add('maxParticipants', 'Must be a positive integer')

    contact_email = _get(fields, 'contactEmail') or ''
    if not contact_email:
        errors.add('contactEmail', 'Contact email is required')
    elif not validate_email(contact_email):
        errors.add('contactEmail', 'Invalid email format')

    contact_phone = _get(fields, 'contactPhone') or ''
    if not PHONE_PATTERN.fullmatch(contact_phone):
        errors.add('contactPhone', 'Phone number must be 10 digits')

    whatsapp_link = _get(fields, 'whatsappLink') or ''
    if whatsapp_link and not validate_url(whatsapp_link):
        errors.add('whatsappLink', 'Invalid URL')

    uploads = {key: _check_file(errors, key, files.get(key)) for key in FILE_RULES}

    rules = _check_value_list(errors, 'rules', _get_list(fields, 'rules'), 'Rule cannot be empty')
    prizes = _check_value_list(errors, 'prizes', _get_list(fields, 'prizes'), 'Prize cannot be empty')
    schedule_items = _check_schedule(errors, _get_list(fields, 'scheduleItems'))

    # Cross-field ordering runs whenever both dates parsed
    if event_date and end_date and end_date < event_date:
        errors.add('endDate', 'End date cannot be before event date')
    if event_date and deadline and deadline > event_date:
        errors.add('registrationDeadline', 'Registration deadline cannot be after event date')

    if errors:
        return None, errors

    data = {
        'eventTitle': title,
        'eventDate': event_date.isoformat(),
        'eventTime': event_time,
        'endDate': end_date.isoformat(),
        'detailedDescription': description,
        'department': departments,
        'organizingDept': organizing_dept,
        'category': category,
        'festEvent': fest_event,
        'registrationDeadline': deadline.isoformat(),
        'location': location,
        'registrationFee': fee,
        'maxParticipants': max_participants,
        'contactEmail': contact_email,
        'contactPhone': contact_phone,
        'whatsappLink': whatsapp_link,
        'provideClaims': _get_bool(fields, 'provideClaims'),
        'sendNotifications': _get_bool(fields, 'sendNotifications'),
        'rules': rules,
        'prizes': prizes,
        'scheduleItems': schedule_items,
    }
    data.update(uploads)
    return data, errors


def _list_values(items):
    values = []
    for item in items or []:
        value = item.get('value') if isinstance(item, dict) else item
        if value:
            values.append({'value': str(value)})
    return values


def event_to_form_fields(event):
    """Pre-fill values for the edit page from a backend Event"""
    schedule = []
    for item in event.schedule or []:
        if isinstance(item, dict):
            schedule.append({'time': str(item.get('time') or ''), 'activity': str(item.get('activity') or '')})

    fee = event.registration_fee
    return {
        'eventTitle': event.title,
        'eventDate': (event.event_date or '')[:10],
        'endDate': (event.end_date or '')[:10],
        'eventTime': (event.event_time or '')[:5],
        'detailedDescription': event.description or '',
        'department': list(event.department_access or []),
        'organizingDept': event.organizing_dept or '',
        'category': event.category or '',
        'festEvent': event.fest or 'none',
        'registrationDeadline': (event.registration_deadline or '')[:10],
        'location': event.venue or '',
        'registrationFee': '' if fee is None else str(fee),
        'maxParticipants': '' if event.participants_per_team is None else str(event.participants_per_team),
        'contactEmail': event.organizer_email or '',
        'contactPhone': event.organizer_phone or '',
        'whatsappLink': event.whatsapp_invite_link or '',
        'provideClaims': event.claims_applicable,
        'sendNotifications': False,
        'rules': _list_values(event.rules),
        'prizes': _list_values(event.prizes),
        'scheduleItems': schedule,
    }
