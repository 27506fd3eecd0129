from flask import Blueprint
import logging


fests_bp = Blueprint('fests', __name__)

logger = logging.getLogger(__name__)

from . import (
    list_fests,
    get_fest,
    create_fest,
    edit_fest,
)

__all__ = ['fests_bp']
