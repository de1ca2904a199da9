"""
Centralized logging service for OrderDesk.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import traceback
from contextlib import closing
from datetime import datetime
from flask import request, has_request_context
from .database import Database
from .config import get_config_value

console = logging.getLogger('orderdesk')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _log_db_path():
        return get_config_value('LOG_DB')

    @staticmethod
    def _ensure_logs_table(db_path):
        """Ensure the app_logs table exists"""
        Database.ensure_parent_dir(db_path)
        with closing(Database.connect(db_path)) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_source
                ON app_logs(source)
            """)
            conn.commit()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        try:
            ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
            if ip_address and ',' in ip_address:
                ip_address = ip_address.split(',')[0].strip()

            user_agent = request.headers.get('User-Agent', '')
            request_path = request.path

            return ip_address, user_agent, request_path
        except Exception:
            return None, None, None

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (orders, auth, content_store, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        console.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        db_path = LoggingService._log_db_path()
        if not db_path:
            return

        try:
            LoggingService._ensure_logs_table(db_path)
            ip_address, user_agent, request_path = LoggingService._get_request_context()
            timestamp = datetime.now().isoformat()

            with closing(Database.connect(db_path)) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level, source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to console logging if database fails
            console.warning("Logging service error: %s", e)
            if details:
                console.warning("Details: %s", details)

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log operator actions (login, status change, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)


# Convenience instance for easy importing
logger = LoggingService()
