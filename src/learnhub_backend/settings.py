import os
import threading

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL","INFO")
        self.DATABASE_URL = os.environ.get("DATABASE_URL",None)
        # Token settings
        self.TOKEN_SECRET = os.environ.get("TOKEN_SECRET","change-me")
        self.TOKEN_ALGORITHM = os.environ.get("TOKEN_ALGORITHM","HS256")
        self.TOKEN_EXPIRE_MINUTES = int(os.environ.get("TOKEN_EXPIRE_MINUTES", 60))
        # Bootstrap admin, created on startup when both are set
        self.ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL",None)
        self.ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD",None)

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

settings = BackendSettings()
