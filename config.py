#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Campus events portal - configuration
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# Load .env before any Config attribute is read
load_dotenv()

class Config:
    """Application configuration"""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Permissions database (users.is_organiser)
    DB_HOST = os.environ.get('DB_HOST') or 'localhost'
    DB_PORT = int(os.environ.get('DB_PORT') or 3306)
    DB_USER = os.environ.get('DB_USER') or 'campus_events'
    DB_PASSWORD = os.environ.get('DB_PASSWORD') or ''
    DB_NAME = os.environ.get('DB_NAME') or 'campus_events'
    DB_POOL_NAME = os.environ.get('DB_POOL_NAME') or 'campus_events_pool'
    DB_POOL_SIZE = int(os.environ.get('DB_POOL_SIZE') or 5)
    SLOW_QUERY_THRESHOLD_MS = 50

    # Server
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 3000)
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'
    APP_URL = os.environ.get('APP_URL') or 'http://localhost:3000'

    # Backend API origin
    API_URL = os.environ.get('API_URL') or 'http://localhost:8000'
    API_TIMEOUT = int(os.environ.get('API_TIMEOUT') or 30)

    # Hosted auth provider
    AUTH_URL = os.environ.get('AUTH_URL') or ''
    AUTH_ANON_KEY = os.environ.get('AUTH_ANON_KEY') or ''
    AUTH_PROVIDER = os.environ.get('AUTH_PROVIDER') or 'google'
    ALLOWED_EMAIL_DOMAIN = os.environ.get('ALLOWED_EMAIL_DOMAIN') or 'christuniversity.in'

    # Session
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = False  # True in production
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Access gate
    GUARD_EXCLUDED_PREFIXES = ('/api', '/static/', '/favicon.ico')
    ASSET_PREFIXES = ('/_next/', '/static/')
    PUBLIC_PATHS = ['/', '/auth/callback', '/error', '/about', '/auth']
    PRIVILEGED_PREFIXES = ['/manage', '/create', '/edit']
    LOGIN_PATH = '/auth'
    ERROR_PATH = '/error'

    # Uploads
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    MAX_FILE_SIZE_IMAGE = 3 * 1024 * 1024
    MAX_FILE_SIZE_BANNER = 2 * 1024 * 1024
    MAX_FILE_SIZE_PDF = 5 * 1024 * 1024
    ACCEPTED_IMAGE_TYPES = ['image/jpeg', 'image/png', 'image/webp', 'image/gif']
    ACCEPTED_PDF_TYPES = ['application/pdf']

    # Event list cache
    REDIS_URL = os.environ.get('REDIS_URL')
    EVENT_CACHE_TTL = int(os.environ.get('EVENT_CACHE_TTL') or 60)

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'campus_events.log'

    SYSTEM_NAME = 'Campus Events'
    SYSTEM_VERSION = '1.0.0'

    # Form option lists
    FEST_CATEGORIES = [
        {'value': 'technology', 'label': 'Technology'},
        {'value': 'academic', 'label': 'Academic'},
        {'value': 'sports', 'label': 'Sports'},
        {'value': 'cultural', 'label': 'Cultural'},
        {'value': 'workshop', 'label': 'Workshop'},
    ]
    FEST_IMAGE_TYPES = ['image/jpeg', 'image/png']

    EVENT_CONFIG = {
        'categories': [
            {'value': 'academic', 'label': 'Academic'},
            {'value': 'cultural', 'label': 'Cultural'},
            {'value': 'sports', 'label': 'Sports'},
            {'value': 'arts', 'label': 'Arts'},
            {'value': 'literary', 'label': 'Literary'},
            {'value': 'innovation', 'label': 'Innovation'},
        ],
        'departments': [
            {'value': 'all_departments', 'label': 'All Departments'},
            {'value': 'dept_english_cultural_studies', 'label': 'Department of English and Cultural Studies'},
            {'value': 'dept_languages', 'label': 'Department of Languages'},
            {'value': 'dept_media_studies', 'label': 'Department of Media Studies'},
            {'value': 'dept_performing_arts_theatre_music', 'label': 'Department of Performing Arts, Theatre Studies and Music'},
            {'value': 'dept_philosophy_theology', 'label': 'Department of Philosophy and Theology'},
            {'value': 'dept_business_management', 'label': 'Department of Business and Management'},
            {'value': 'dept_hotel_management', 'label': 'Department of Hotel Management'},
            {'value': 'dept_tourism_management', 'label': 'Department of Tourism Management'},
            {'value': 'dept_commerce', 'label': 'Department of Commerce'},
            {'value': 'dept_professional_studies', 'label': 'Department of Professional Studies'},
            {'value': 'dept_civil_engineering', 'label': 'Department of Civil Engineering'},
            {'value': 'dept_computer_science_engineering', 'label': 'Department of Computer Science and Engineering'},
            {'value': 'dept_electrical_electronics_engineering', 'label': 'Department of Electrical and Electronics Engineering'},
            {'value': 'dept_electronics_communication_engineering', 'label': 'Department of Electronics and Communication Engineering'},
            {'value': 'dept_mechanical_automobile_engineering', 'label': 'Department of Mechanical and Automobile Engineering'},
            {'value': 'dept_sciences_humanities_eng', 'label': 'Department of Sciences and Humanities'},
            {'value': 'dept_computer_science_sci', 'label': 'Department of Computer Science'},
            {'value': 'dept_chemistry', 'label': 'Department of Chemistry'},
            {'value': 'dept_life_sciences', 'label': 'Department of Life Sciences'},
            {'value': 'dept_mathematics', 'label': 'Department of Mathematics'},
            {'value': 'dept_physics_electronics', 'label': 'Department of Physics and Electronics'},
            {'value': 'dept_statistics_data_science', 'label': 'Department of Statistics and Data Science'},
            {'value': 'dept_economics', 'label': 'Department of Economics'},
            {'value': 'dept_international_studies_political_science_history', 'label': 'Department of International Studies, Political Science, and History'},
            {'value': 'dept_sociology_social_work', 'label': 'Department of Sociology and Social Work'},
            {'value': 'dept_liberal_arts', 'label': 'Department of Liberal Arts'},
        ],
    }

    @staticmethod
    def init_app(app):
        """Initialise logging for the application"""
        import logging
        handlers = [logging.StreamHandler()]
        log_file = app.config.get('LOG_FILE')
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        logging.basicConfig(
            level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO')),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )
        # requests/urllib3 are noisy at INFO
        logging.getLogger('urllib3').setLevel(logging.WARNING)

class DevelopmentConfig(Config):
    """Development"""
    DEBUG = True
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'campus-events-dev-secret-key'

class ProductionConfig(Config):
    """Production"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    SECRET_KEY = os.environ.get('SECRET_KEY')

    DB_HOST = os.environ.get('PROD_DB_HOST') or Config.DB_HOST
    DB_USER = os.environ.get('PROD_DB_USER') or Config.DB_USER
    DB_PASSWORD = os.environ.get('PROD_DB_PASSWORD') or Config.DB_PASSWORD
    DB_NAME = os.environ.get('PROD_DB_NAME') or Config.DB_NAME

class TestingConfig(Config):
    """Testing"""
    TESTING = True
    SECRET_KEY = 'campus-events-test-secret-key'
    DB_NAME = 'campus_events_test'
    API_URL = 'http://api.test'
    AUTH_URL = 'http://auth.test'
    AUTH_ANON_KEY = 'test-anon-key'
    APP_URL = 'http://localhost'
    LOG_FILE = None
    REDIS_URL = None

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
