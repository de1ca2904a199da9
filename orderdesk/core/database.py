import os
import sqlite3
import threading


class Database:
    # Serialises schema creation across request threads
    _lock = threading.Lock()

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @classmethod
    def ensure_parent_dir(cls, path):
        """Create the directory holding a database file if it is missing."""
        parent = os.path.dirname(os.path.abspath(path))
        with cls._lock:
            os.makedirs(parent, exist_ok=True)
        return parent
