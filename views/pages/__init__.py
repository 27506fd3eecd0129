from flask import Blueprint
import logging


pages_bp = Blueprint('pages', __name__)

logger = logging.getLogger(__name__)

from . import (
    home,
    discover,
    manage,
    profile,
    error,
)

__all__ = ['pages_bp']
