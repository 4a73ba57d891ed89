"""
Flask JSON API for the Aircraft Maintenance Dashboard
Export/import with schema migration, calendar projection and alert status.

Authentication is enforced by the hosting platform; the caller's identity
arrives in the X-User-Id header.
"""

from flask import Flask, request, jsonify
import logging
from typing import Optional

from app.config import get_config
from app.errors import NotFoundError, ValidationError
from api.middleware import setup_error_handlers, setup_request_logging, safe_endpoint
from models.counters import CounterSnapshot
from models.maintenance import MaintenanceLog
from models.notification import Notification, NotificationBasis
from services.alert_service import CurrentState, classify, group_counter_notifications
from services.base_service import IPersistence
from services.data_transfer_service import build_export, import_snapshot, preview_import
from services.migration_service import SchemaMigrator, get_migrator
from services.recurrence_service import build_calendar_day, highlighted_dates, next_due_date
from services.schema_migrations import CURRENT_SCHEMA_VERSION
from services.transaction_service import update_maintenance_transactions, void_maintenance_transactions
from utils.date_utils import format_date_for_display
from utils.validators import validate_query_date

logger = logging.getLogger(__name__)


def _user_id() -> str:
    user_id = request.headers.get('X-User-Id')
    if not user_id:
        raise ValidationError("Missing X-User-Id header", field='X-User-Id')
    return user_id


def _json_body():
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Request body must be JSON", field='body')
    return payload


def create_app(
    persistence: Optional[IPersistence] = None,
    migrator: Optional[SchemaMigrator] = None
) -> Flask:
    """
    Build the Flask application

    Args:
        persistence: Table store (default: Supabase, resolved on first use)
        migrator: Snapshot migrator (default: shipped migrations)
    """
    config = get_config()

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max import file

    setup_error_handlers(app)
    if config.debug:
        setup_request_logging(app)

    lookahead = config.notifications.lookahead_occurrences
    alert_defaults = {
        'default_alert_days': config.notifications.default_alert_days,
        'default_alert_hours': config.notifications.default_alert_hours
    }
    migrator = migrator or get_migrator()

    def store() -> IPersistence:
        if persistence is not None:
            return persistence
        # Imported lazily so the app starts without Supabase credentials
        from supabase_client import get_persistence
        return get_persistence()

    # ==================== STATUS ====================

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Simple health check endpoint"""
        return jsonify({'status': 'ok', 'message': 'Maintenance Dashboard is running'})

    @app.route('/api/status', methods=['GET'])
    def api_status():
        """Configuration and schema status"""
        return jsonify({
            'schema_version': CURRENT_SCHEMA_VERSION,
            'migrations': [m.label for m in migrator.registry.migrations],
            'supabase_configured': persistence is not None or config.supabase is not None,
            'lookahead_occurrences': lookahead,
        })

    # ==================== EXPORT / IMPORT ====================

    @app.route('/api/data/export', methods=['GET'])
    @safe_endpoint
    def export_data():
        snapshot = build_export(store(), _user_id())
        return jsonify(snapshot)

    @app.route('/api/data/import/preview', methods=['POST'])
    @safe_endpoint
    def import_preview():
        return jsonify(preview_import(_json_body(), migrator))

    @app.route('/api/data/import', methods=['POST'])
    @safe_endpoint
    def import_data():
        user_id = _user_id()
        aircraft_id = request.args.get('aircraft_id')
        result = import_snapshot(store(), user_id, _json_body(), aircraft_id=aircraft_id, migrator=migrator)

        if not result.success:
            return jsonify({
                'success': False,
                'error': result.error,
                'migrationsApplied': result.metadata.get('migrationsApplied', [])
            }), 422

        return jsonify({'success': True, **result.data.to_dict()})

    # ==================== CALENDAR / NOTIFICATIONS ====================

    @app.route('/api/calendar', methods=['GET'])
    @safe_endpoint
    def calendar_day():
        is_valid, day, error = validate_query_date(request.args.get('date'))
        if not is_valid:
            raise ValidationError(error, field='date')

        user_id = _user_id()
        db = store()
        notifications = [
            Notification.from_dict(row, **alert_defaults)
            for row in db.query('notifications', {'user_id': user_id, 'is_completed': False})
        ]
        logs = [MaintenanceLog.from_dict(row) for row in db.query('maintenance_logs', {'user_id': user_id})]

        response = build_calendar_day(notifications, logs, day, lookahead)
        response['label'] = format_date_for_display(day)
        response['highlighted'] = highlighted_dates(notifications, logs, lookahead)
        return jsonify(response)

    @app.route('/api/notifications/active', methods=['GET'])
    @safe_endpoint
    def active_notifications():
        is_valid, today, error = validate_query_date(request.args.get('today'))
        if not is_valid:
            raise ValidationError(error, field='today')

        rows = store().query('notifications', {'user_id': _user_id(), 'is_completed': False})
        notifications = sorted(
            (Notification.from_dict(row, **alert_defaults) for row in rows if
             NotificationBasis.from_string(row.get('notification_basis')) == NotificationBasis.DATE),
            key=lambda n: (n.initial_date is None, n.initial_date)
        )

        state = CurrentState(today=today)
        items = []
        for notification in notifications:
            due = next_due_date(notification, today, lookahead)
            items.append({
                **notification.to_dict(),
                'next_due_date': due.isoformat() if due else None,
                'status': classify(notification, state, occurrence_date=due).value
            })
        return jsonify({'notifications': items})

    @app.route('/api/counters/notifications', methods=['GET'])
    @safe_endpoint
    def counter_notifications():
        user_id = _user_id()
        aircraft_id = request.args.get('aircraft_id')
        if not aircraft_id:
            raise ValidationError("Missing aircraft_id parameter", field='aircraft_id')

        db = store()
        owner = {'user_id': user_id, 'aircraft_id': aircraft_id}
        counter_rows = db.query('aircraft_counters', owner)
        counters = CounterSnapshot.from_dict(counter_rows[0]) if counter_rows else None

        notifications = [
            Notification.from_dict(row, **alert_defaults)
            for row in db.query('notifications', {**owner, 'is_completed': False, 'notification_basis': 'Counter'})
        ]

        state = CurrentState(counters=counters)
        groups = group_counter_notifications(notifications, counters)
        return jsonify({
            'counters': counters.to_dict() if counters else None,
            'groups': [
                {
                    'counter_type': counter_type,
                    'current_value': counters.value_for(items[0][0].counter_type),
                    'notifications': [
                        {
                            **notification.to_dict(),
                            'remaining': remaining,
                            'status': classify(notification, state).value
                        }
                        for notification, remaining in items
                    ]
                }
                for counter_type, items in groups.items()
            ]
        })

    # ==================== MAINTENANCE TRANSACTIONS ====================

    def owned_log(db: IPersistence, log_id: str, user_id: str) -> dict:
        rows = db.query('maintenance_logs', {'id': log_id, 'user_id': user_id})
        if not rows:
            raise NotFoundError("Maintenance log", log_id)
        return rows[0]

    @app.route('/api/maintenance-logs/<log_id>/transactions', methods=['POST'])
    @safe_endpoint
    def sync_maintenance_transactions(log_id):
        """Create or bring up to date the ledger lines of a saved log"""
        user_id = _user_id()
        db = store()
        row = owned_log(db, log_id, user_id)

        plan = update_maintenance_transactions(db, user_id, row.get('aircraft_id'), MaintenanceLog.from_dict(row))
        return jsonify({
            'updated': len(plan.updates),
            'created': len(plan.inserts),
            'voided': len(plan.voids)
        })

    @app.route('/api/maintenance-logs/<log_id>/transactions', methods=['DELETE'])
    @safe_endpoint
    def void_transactions(log_id):
        """Void the ledger lines of a log that is being deleted"""
        user_id = _user_id()
        db = store()
        owned_log(db, log_id, user_id)
        return jsonify({'voided': void_maintenance_transactions(db, log_id, user_id)})

    logger.info(f"App created - schema v{CURRENT_SCHEMA_VERSION}, lookahead {lookahead}")
    return app


def _configure_logging():
    logging.basicConfig(
        level=getattr(logging, get_config().log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


if __name__ == '__main__':
    _configure_logging()
    create_app().run(debug=get_config().debug, port=5000)
