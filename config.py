import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None
    STORE_BACKEND = os.environ.get('STORE_BACKEND', 'file')
    STORE_KEY = os.environ.get('STORE_KEY', 'scholarly_data_v1')
    STORE_PATH = os.environ.get('STORE_PATH', 'instance')
    FIRESTORE_COLLECTION = os.environ.get('FIRESTORE_COLLECTION', 'scholarly')
    FIREBASE_PROJECT_ID = os.environ.get('FIREBASE_PROJECT_ID', '')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
