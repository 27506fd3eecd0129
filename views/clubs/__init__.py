from flask import Blueprint


clubs_bp = Blueprint('clubs', __name__)


from . import (
    list_clubs,
    get_club,
)

__all__ = ['clubs_bp']
