#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - record models
"""

import json
import time
from datetime import datetime


def _text(value):
    """Stringify a backend value, mapping None to ''"""
    if value is None:
        return ''
    return str(value)


def _json_list(value):
    """Backend list columns may arrive as JSON strings"""
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value.strip():
        try:
            parsed = json.loads(value)
        except ValueError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []


class Event:
    """Event as returned by the backend API"""
    def __init__(self, event_id=None, title='', description=None, event_date=None,
                 event_time=None, end_date=None, venue=None, category=None,
                 department_access=None, organizing_dept=None, fest=None,
                 registration_deadline=None, registration_fee=None,
                 participants_per_team=None, organizer_email=None, organizer_phone=None,
                 whatsapp_invite_link=None, claims_applicable=False,
                 event_image_url=None, banner_url=None, pdf_url=None,
                 schedule=None, rules=None, prizes=None, created_by=None,
                 created_at=None, total_participants=None):
        self.event_id = event_id
        self.title = title or ''
        self.description = description
        self.event_date = event_date
        self.event_time = event_time
        self.end_date = end_date
        self.venue = venue
        self.category = category
        self.department_access = department_access or []
        self.organizing_dept = organizing_dept
        self.fest = fest
        self.registration_deadline = registration_deadline
        self.registration_fee = registration_fee
        self.participants_per_team = participants_per_team
        self.organizer_email = organizer_email
        self.organizer_phone = organizer_phone
        self.whatsapp_invite_link = whatsapp_invite_link
        self.claims_applicable = bool(claims_applicable)
        self.event_image_url = event_image_url
        self.banner_url = banner_url
        self.pdf_url = pdf_url
        self.schedule = schedule or []
        self.rules = rules or []
        self.prizes = prizes or []
        self.created_by = created_by
        self.created_at = created_at
        self.total_participants = total_participants

    @classmethod
    def from_api(cls, data):
        """Build an Event from a backend row"""
        department_access = data.get('department_access')
        if isinstance(department_access, str):
            department_access = _json_list(department_access) or [department_access]
        return cls(
            event_id=data.get('event_id'),
            title=data.get('title'),
            description=data.get('description'),
            event_date=data.get('event_date'),
            event_time=data.get('event_time'),
            end_date=data.get('end_date'),
            venue=data.get('venue'),
            category=data.get('category'),
            department_access=department_access,
            organizing_dept=data.get('organizing_dept'),
            fest=data.get('fest'),
            registration_deadline=data.get('registration_deadline'),
            registration_fee=data.get('registration_fee'),
            participants_per_team=data.get('participants_per_team'),
            organizer_email=data.get('organizer_email'),
            organizer_phone=data.get('organizer_phone'),
            whatsapp_invite_link=data.get('whatsapp_invite_link'),
            claims_applicable=data.get('claims_applicable'),
            event_image_url=data.get('event_image_url'),
            banner_url=data.get('banner_url'),
            pdf_url=data.get('pdf_url'),
            schedule=_json_list(data.get('schedule')),
            rules=_json_list(data.get('rules')),
            prizes=_json_list(data.get('prizes')),
            created_by=data.get('created_by'),
            created_at=data.get('created_at'),
            total_participants=data.get('total_participants'),
        )

    def get_display_tags(self):
        """Category, Free/Paid and Claims; at most three"""
        tags = []
        if self.category:
            tags.append(self.category)
        fee = self.registration_fee
        if fee is None or fee == 0:
            tags.append('Free')
        elif isinstance(fee, (int, float)) and fee > 0:
            tags.append('Paid')
        if self.claims_applicable:
            tags.append('Claims')
        return [tag for tag in tags if tag][:3]

    def to_dict(self):
        return {
            'event_id': self.event_id,
            'title': self.title,
            'description': self.description,
            'event_date': self.event_date,
            'event_time': self.event_time,
            'end_date': self.end_date,
            'venue': self.venue,
            'category': self.category,
            'department_access': self.department_access,
            'organizing_dept': self.organizing_dept,
            'fest': self.fest,
            'registration_deadline': self.registration_deadline,
            'registration_fee': self.registration_fee,
            'participants_per_team': self.participants_per_team,
            'organizer_email': self.organizer_email,
            'organizer_phone': self.organizer_phone,
            'whatsapp_invite_link': self.whatsapp_invite_link,
            'claims_applicable': self.claims_applicable,
            'event_image_url': self.event_image_url,
            'banner_url': self.banner_url,
            'pdf_url': self.pdf_url,
            'schedule': self.schedule,
            'rules': self.rules,
            'prizes': self.prizes,
            'created_by': self.created_by,
            'created_at': self.created_at,
            'total_participants': self.total_participants,
        }


class Fest:
    """Fest as returned by the backend API"""
    def __init__(self, fest_id=None, fest_title='', description='', opening_date=None,
                 closing_date=None, contact_email=None, contact_phone=None,
                 organizing_dept=None, fest_image_url=None, created_by=None,
                 department_access=None, category=None, event_heads=None):
        self.fest_id = fest_id
        self.fest_title = fest_title or ''
        self.description = description or ''
        self.opening_date = opening_date
        self.closing_date = closing_date
        self.contact_email = contact_email
        self.contact_phone = contact_phone
        self.organizing_dept = organizing_dept
        self.fest_image_url = fest_image_url
        self.created_by = created_by
        self.department_access = department_access or []
        self.category = category
        self.event_heads = event_heads or []

    @classmethod
    def from_api(cls, data):
        return cls(
            fest_id=data.get('fest_id'),
            fest_title=data.get('fest_title'),
            description=data.get('description'),
            opening_date=data.get('opening_date'),
            closing_date=data.get('closing_date'),
            contact_email=data.get('contact_email'),
            contact_phone=data.get('contact_phone'),
            organizing_dept=data.get('organizing_dept'),
            fest_image_url=data.get('fest_image_url'),
            created_by=data.get('created_by'),
            department_access=_json_list(data.get('department_access')),
            category=data.get('category'),
            event_heads=_json_list(data.get('event_heads')),
        )

    def to_dict(self):
        return {
            'fest_id': self.fest_id,
            'fest_title': self.fest_title,
            'description': self.description,
            'opening_date': self.opening_date,
            'closing_date': self.closing_date,
            'contact_email': self.contact_email,
            'contact_phone': self.contact_phone,
            'organizing_dept': self.organizing_dept,
            'fest_image_url': self.fest_image_url,
            'created_by': self.created_by,
            'department_access': self.department_access,
            'category': self.category,
            'event_heads': self.event_heads,
        }


class Club:
    """Display-only club/centre record"""
    def __init__(self, id, title, description, subtitle=None, image=None,
                 categories=None, mission=None, vision=None, activities=None,
                 leaders=None, contact_info=None, meeting_schedule=None,
                 join_process=None, cover_image=None, logo=None):
        self.id = id
        self.title = title
        self.subtitle = subtitle
        self.description = description
        self.image = image
        self.categories = categories or []
        self.mission = mission
        self.vision = vision
        self.activities = activities or []
        self.leaders = leaders or []
        self.contact_info = contact_info or {}
        self.meeting_schedule = meeting_schedule
        self.join_process = join_process
        self.cover_image = cover_image
        self.logo = logo


class Student:
    """Event registrant"""
    def __init__(self, id=0, name='', register_number='', course='',
                 department='', email='', created_at=''):
        self.id = id
        self.name = name
        self.register_number = register_number
        self.course = course
        self.department = department
        self.email = email
        self.created_at = created_at

    @classmethod
    def from_api(cls, data):
        """Map a registration row; field names vary between backend versions"""
        return cls(
            id=data.get('registration_id') or data.get('id') or 0,
            name=_text(data.get('name')),
            register_number=_text(data.get('register_number')),
            course=_text(data.get('course')),
            department=_text(data.get('department')),
            email=_text(data.get('email')),
            created_at=data.get('created_at') or data.get('registration_time') or '',
        )

    def matches(self, query):
        """Case-insensitive substring match on name, register number or email"""
        needle = (query or '').lower()
        return (
            needle in self.name.lower()
            or needle in self.register_number.lower()
            or needle in self.email.lower()
        )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'register_number': self.register_number,
            'course': self.course,
            'department': self.department,
            'email': self.email,
            'created_at': self.created_at,
        }


class AuthSession:
    """Session issued by the hosted auth provider"""
    def __init__(self, access_token, email=None, refresh_token=None,
                 expires_at=None, user=None):
        self.access_token = access_token
        self.email = email
        self.refresh_token = refresh_token
        self.expires_at = expires_at
        self.user = user or {}

    @classmethod
    def from_token_response(cls, data):
        """Build from the provider's token endpoint payload"""
        user = data.get('user') or {}
        expires_at = data.get('expires_at')
        if expires_at is None and data.get('expires_in') is not None:
            expires_at = int(time.time()) + int(data['expires_in'])
        return cls(
            access_token=data.get('access_token'),
            email=user.get('email'),
            refresh_token=data.get('refresh_token'),
            expires_at=expires_at,
            user=user,
        )

    def is_expired(self, now=None):
        if not self.expires_at:
            return False
        now = now if now is not None else time.time()
        return now >= self.expires_at

    def to_dict(self):
        return {
            'access_token': self.access_token,
            'email': self.email,
            'refresh_token': self.refresh_token,
            'expires_at': self.expires_at,
            'user': self.user,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            access_token=data.get('access_token'),
            email=data.get('email'),
            refresh_token=data.get('refresh_token'),
            expires_at=data.get('expires_at'),
            user=data.get('user'),
        )


class AppUser:
    """Row of the users table"""
    def __init__(self, id=None, email=None, name=None, register_number=None,
                 course=None, department=None, avatar_url=None,
                 is_organiser=False, created_at=None):
        self.id = id
        self.email = email
        self.name = name
        self.register_number = register_number
        self.course = course
        self.department = department
        self.avatar_url = avatar_url
        self.is_organiser = bool(is_organiser)
        self.created_at = created_at or datetime.now()

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'register_number': self.register_number,
            'course': self.course,
            'department': self.department,
            'avatar_url': self.avatar_url,
            'is_organiser': self.is_organiser,
            'created_at': self.created_at.isoformat() if isinstance(self.created_at, datetime) else self.created_at,
        }


DATABASE_SCHEMA = {
    'users': '''
        CREATE TABLE IF NOT EXISTS users (
            id INT AUTO_INCREMENT PRIMARY KEY,
            email VARCHAR(255) UNIQUE NOT NULL,
            name VARCHAR(200) NOT NULL DEFAULT 'New User',
            register_number VARCHAR(20) DEFAULT NULL,
            course VARCHAR(200) DEFAULT NULL,
            department VARCHAR(200) DEFAULT NULL,
            avatar_url VARCHAR(500) DEFAULT NULL,
            is_organiser BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            INDEX idx_register_number (register_number)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='Portal users and organiser flag';
    ''',
}
