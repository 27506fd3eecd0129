#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - helper functions
"""

import re
from datetime import datetime, date
from urllib.parse import urlparse


def slugify(text):
    """Lower-case, whitespace runs to '-', drop anything outside [a-z0-9-]"""
    if not isinstance(text, str):
        return ''
    slug = re.sub(r'\s+', '-', text.lower())
    return re.sub(r'[^a-z0-9-]', '', slug)


def event_belongs_to_fest(event, fest_slug, fest=None):
    """Whether an event's free-text fest field points at the given fest.

    Events store the fest *title*, so the association is made by comparing
    slugs. When the fest record is known its id is accepted as an exact match
    as well.
    """
    fest_name = event.get('fest') if isinstance(event, dict) else getattr(event, 'fest', None)
    if not isinstance(fest_name, str) or not fest_name.strip():
        return False
    if fest is not None and fest.fest_id and fest_name == fest.fest_id:
        return True
    return slugify(fest_name) == fest_slug


def parse_date(date_str):
    """Parse a YYYY-MM-DD string (a trailing time part is ignored)"""
    if not date_str:
        return None
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    try:
        return datetime.strptime(str(date_str).strip()[:10], '%Y-%m-%d').date()
    except ValueError:
        return None


def format_date(value, format_str='%b %d, %Y', default='Date TBD'):
    """Format a date for display, e.g. 'Mar 05, 2025'"""
    parsed = parse_date(value)
    if not parsed:
        return default
    return parsed.strftime(format_str)


def format_time(value, default='Time TBD'):
    """Format an 'HH:MM[:SS]' string as '07:30 PM'"""
    if not value:
        return default
    for fmt in ('%H:%M:%S', '%H:%M'):
        try:
            return datetime.strptime(str(value), fmt).strftime('%I:%M %p')
        except ValueError:
            continue
    return default


def validate_email(email):
    """Check email format"""
    if not email:
        return False

    pattern = r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}'
    return re.fullmatch(pattern, email) is not None


def validate_url(url):
    """Check for an absolute http(s) URL"""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def sort_events_by_date(events):
    """Upcoming-first ordering; undated events go last"""
    return sorted(events, key=lambda e: (parse_date(e.event_date) is None, parse_date(e.event_date) or date.max))


def filter_students(students, query):
    """Registrants matching query; an empty query keeps everyone.

    The query is used as given; callers trim user input.
    """
    if not query:
        return list(students)
    return [student for student in students if student.matches(query)]
