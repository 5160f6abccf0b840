from flask import request, send_file
from io import BytesIO
from datetime import datetime

from utils.decorators import admin_required, log_action, handle_db_errors
from utils.excel_handler import ExcelHandler
from scoring_engine import scoring_engine

from . import admin_bp, logger


@admin_bp.route('/leaderboard/export', methods=['GET'])
@admin_required
@log_action('导出排行榜')
@handle_db_errors
def export_leaderboard():
    """导出完整排行榜为 Excel"""
    category = request.args.get('category') or None
    entries = scoring_engine.list_approved(category)

    excel_data = ExcelHandler().generate_leaderboard_excel(entries)
    filename = f"leaderboard_{category or 'all'}_{datetime.now().strftime('%Y%m%d%H%M%S')}.xlsx"

    logger.info(f"导出排行榜 {filename}，共 {len(entries)} 条")
    return send_file(
        BytesIO(excel_data),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=filename,
    )
