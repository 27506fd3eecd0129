import logging
import re

from mysql.connector import Error

from models import AppUser


logger = logging.getLogger(__name__)


def split_register_number(full_name, register_number=None):
    """Split a trailing numeric register number off a display name.

    Google display names for students look like "Asha Menon 2341234".
    An explicit register number always wins.
    """
    name = (full_name or '').strip()
    if name and not register_number:
        parts = name.split(' ')
        if len(parts) > 1 and re.match(r'^\d+$', parts[-1]):
            return ' '.join(parts[:-1]), parts[-1]
    return name, register_number


class UserDbMixin:
    """User and permission queries.

    The host class provides:
    - self.get_connection(): context manager yielding a connection
    """

    def get_user_by_email(self, email):
        """Return the AppUser for an email, or None"""
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor(dictionary=True)
                cursor.execute(
                    """
                    SELECT id, email, name, register_number, course, department,
                           avatar_url, is_organiser, created_at
                    FROM users
                    WHERE email = %s
                    LIMIT 1
                    """,
                    (email,),
                )
                row = cursor.fetchone()
                cursor.close()

                if row:
                    return AppUser(
                        id=row['id'],
                        email=row['email'],
                        name=row.get('name'),
                        register_number=row.get('register_number'),
                        course=row.get('course'),
                        department=row.get('department'),
                        avatar_url=row.get('avatar_url'),
                        is_organiser=row.get('is_organiser'),
                        created_at=row.get('created_at'),
                    )
                return None

        except Error as e:
            logger.error(f"Failed to fetch user {email}: {e}")
            raise

    def get_organiser_flag(self, email):
        """Single-row organiser lookup.

        Returns the flag, or None when no row exists. Database errors
        propagate to the caller.
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT is_organiser FROM users WHERE email = %s LIMIT 1",
                (email,),
            )
            row = cursor.fetchone()
            cursor.close()

        if row is None:
            return None
        return bool(row[0])

    def ensure_user(self, auth_user):
        """Insert a users row on first sign-in; return (AppUser, is_new)"""
        email = auth_user.get('email')
        if not email:
            raise ValueError('email is required')

        existing = self.get_user_by_email(email)
        if existing:
            return existing, False

        metadata = auth_user.get('user_metadata') or {}
        name, register_number = split_register_number(
            auth_user.get('name') or metadata.get('full_name') or '',
            metadata.get('register_number'),
        )
        avatar_url = (
            metadata.get('avatar_url')
            or metadata.get('picture')
            or auth_user.get('avatar_url')
            or auth_user.get('picture')
        )

        user = AppUser(
            email=email,
            name=name or 'New User',
            register_number=register_number or None,
            avatar_url=avatar_url,
        )
        try:
            with self.get_connection() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO users (email, name, register_number, avatar_url)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (user.email, user.name, user.register_number, user.avatar_url),
                )
                user.id = cursor.lastrowid
                conn.commit()
                cursor.close()
        except Error as e:
            logger.error(f"Failed to create user {email}: {e}")
            raise

        logger.info(f"Created user record for {email}")
        return user, True
