from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, firestore_async

from .config import get_settings

@lru_cache()
def get_db():
    """Async Firestore client, initialised on first use.

    Without FIREBASE_CREDS_PATH the default application credentials are used
    (e.g. on Cloud Run, or against the Firestore emulator).
    """
    settings = get_settings()
    creds_path = settings.FIREBASE_CREDS_PATH_ABSOLUTE
    cred = credentials.Certificate(str(creds_path)) if creds_path else None
    try:
        firebase_app = firebase_admin.get_app()
    except ValueError:
        firebase_app = firebase_admin.initialize_app(cred)
    return firestore_async.client(firebase_app)
