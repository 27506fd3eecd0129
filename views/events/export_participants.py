from io import BytesIO

from flask import flash, redirect, send_file, url_for

from utils.decorators import log_action, handle_backend_errors
from utils.excel_handler import ExcelHandler, XLSX_MIMETYPE

from . import events_bp, logger
from .get_participants import load_students


@events_bp.route('/event/<event_id>/participants/export', methods=['GET'])
@log_action('Export participants')
@handle_backend_errors(redirect_endpoint='pages.manage')
def export_participants(event_id):
    """Download the registrant sheet as participants-<event_id>.xlsx"""
    students = load_students(event_id)
    content = ExcelHandler().export_participants(students)
    if content is None:
        flash('No participants to export.', 'info')
        return redirect(url_for('events.get_participants', event_id=event_id))

    logger.info(f"Exporting {len(students)} participants for event {event_id}")
    return send_file(
        BytesIO(content),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"participants-{event_id}.xlsx",
    )
