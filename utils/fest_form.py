"""
Fest creation form schema.

Mirrors utils/event_form.py: validate_fest_form() returns (data, errors)
with errors keyed by field path, and data ready for build_fest_payload().
"""

import re
from datetime import date

from werkzeug.datastructures import FileStorage

from config import Config
from utils.event_form import DATE_PATTERN, EventFormErrors, file_size
from utils.helpers import parse_date

FEST_EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
FEST_PHONE_PATTERN = re.compile(r'\+?[\d\s-]{10,14}')


def _text(fields, key):
    value = fields.get(key)
    return '' if value is None else str(value)


def _check_date(errors, key, value, label):
    if not value.strip():
        errors.add(key, f'{label} date is required')
        return None
    if not DATE_PATTERN.fullmatch(value):
        errors.add(key, 'Format YYYY-MM-DD')
        return None
    parsed = parse_date(value)
    if parsed is None:
        errors.add(key, 'Invalid date value')
    return parsed


def _check_image(errors, file, required):
    if not isinstance(file, FileStorage) or not file.filename:
        if required:
            errors.add('festImage', 'Fest image is required')
        return None
    if file_size(file) > Config.MAX_FILE_SIZE_IMAGE:
        errors.add('festImage', 'Image file must be less than 3MB')
    elif file.mimetype not in Config.FEST_IMAGE_TYPES:
        errors.add('festImage', 'Invalid file type. JPG/PNG only.')
    return file


def fields_from_form(form):
    """request.form -> plain dict; blank event head rows are dropped"""
    fields = {key: form.get(key) for key in form.keys() if key not in ('department', 'eventHeads')}
    fields['department'] = form.getlist('department')
    fields['eventHeads'] = [head for head in form.getlist('eventHeads') if head.strip()]
    return fields


def validate_fest_form(fields, files=None, is_edit=False, today=None):
    """Validate raw fest form values.

    A new fest needs an image and may not open in the past; an edit keeps
    the stored image when none is uploaded.

    Returns:
        (data, errors): data is None whenever errors is non-empty
    """
    files = files or {}
    today = today or date.today()
    errors = EventFormErrors()

    title = _text(fields, 'title')
    if not title.strip():
        errors.add('title', 'Fest title is required')
    elif len(title) > 100:
        errors.add('title', 'Max 100 characters')

    opening = _check_date(errors, 'openingDate', _text(fields, 'openingDate'), 'Opening')
    closing = _check_date(errors, 'closingDate', _text(fields, 'closingDate'), 'Closing')
    if opening and not is_edit and opening < today:
        errors.add('openingDate', 'Opening must be on or after today')
    if opening and closing and closing < opening:
        errors.add('closingDate', 'Must be on/after opening date')

    description = _text(fields, 'detailedDescription')
    if not description.strip():
        errors.add('detailedDescription', 'Description is required')
    elif len(description) > 1000:
        errors.add('detailedDescription', 'Max 1000 characters')

    departments = fields.get('department') or []
    if not isinstance(departments, list) or not departments:
        errors.add('department', 'Select at least one department')
        departments = []

    category = _text(fields, 'category')
    if not category.strip():
        errors.add('category', 'Category is required')

    contact_email = _text(fields, 'contactEmail')
    if not contact_email.strip():
        errors.add('contactEmail', 'Contact email is required')
    elif not FEST_EMAIL_PATTERN.fullmatch(contact_email):
        errors.add('contactEmail', 'Invalid email format')

    contact_phone = _text(fields, 'contactPhone')
    if not contact_phone.strip():
        errors.add('contactPhone', 'Contact phone is required')
    elif not FEST_PHONE_PATTERN.fullmatch(contact_phone):
        errors.add('contactPhone', 'Must be 10-14 digits')

    organizing_dept = _text(fields, 'organizingDept')
    if not organizing_dept.strip():
        errors.add('organizingDept', 'Organizing department is required')
    elif len(organizing_dept) > 100:
        errors.add('organizingDept', 'Max 100 characters')

    event_heads = []
    for index, head in enumerate(fields.get('eventHeads') or []):
        head = str(head)
        if not head.strip():
            continue
        if len(head) > 100:
            errors.add(['eventHeads', index], 'Max 100 chars.')
        elif not FEST_EMAIL_PATTERN.fullmatch(head):
            errors.add(['eventHeads', index], 'Invalid email format.')
        event_heads.append(head)

    image = _check_image(errors, files.get('festImage'), required=not is_edit)

    if errors:
        return None, errors

    return {
        'title': title,
        'opening_date': opening.isoformat(),
        'closing_date': closing.isoformat(),
        'detailed_description': description,
        'department': departments,
        'category': category,
        'contact_email': contact_email,
        'contact_phone': contact_phone,
        'event_heads': event_heads,
        'organizing_dept': organizing_dept,
        'festImage': image,
    }, errors


def fest_to_form_fields(fest):
    """Pre-fill values for the edit page from a backend Fest"""
    return {
        'title': fest.fest_title,
        'openingDate': (fest.opening_date or '')[:10],
        'closingDate': (fest.closing_date or '')[:10],
        'detailedDescription': fest.description,
        'department': list(fest.department_access),
        'category': fest.category or '',
        'contactEmail': fest.contact_email or '',
        'contactPhone': fest.contact_phone or '',
        'organizingDept': fest.organizing_dept or '',
        'eventHeads': [str(head) for head in fest.event_heads if head],
    }
