"""
Persisted hub store.

The whole hub tree lives in one JSON document stored under a fixed key.
`HubStore.load()` reads it once and `HubStore.save()` overwrites it with a
complete snapshot after every mutation. There is no versioning: a document
that cannot be parsed is treated as an empty hub list.

The document itself sits in a "slot", a single key-value cell:
  - FirestoreSlot: one Firestore document, JSON text in its `data` field
  - FileSlot: one JSON file on local disk
  - MemorySlot: a process-local dict (tests, throwaway runs)
"""

import json
import logging
import os
import tempfile

from flask import current_app

from scholarly.models import Hub

logger = logging.getLogger(__name__)

DEFAULT_KEY = 'scholarly_data_v1'
EXTENSION_KEY = 'scholarly_store'


# ---------------------------------------------------------------------------
# Slots
# ---------------------------------------------------------------------------

class MemorySlot:
    def __init__(self, key=DEFAULT_KEY, data=None):
        self.key = key
        self._data = {} if data is None else data

    def read(self):
        return self._data.get(self.key)

    def write(self, text):
        self._data[self.key] = text


class FileSlot:
    def __init__(self, directory, key=DEFAULT_KEY):
        self.key = key
        self.path = os.path.join(directory, f'{key}.json')

    def read(self):
        try:
            with open(self.path, encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, text):
        directory = os.path.dirname(self.path) or '.'
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.tmp-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class FirestoreSlot:
    def __init__(self, db=None, collection='scholarly', key=DEFAULT_KEY):
        self.key = key
        self.collection = collection
        self._db = db

    @property
    def db(self):
        if self._db is None:
            from scholarly.firebase_init import get_db
            self._db = get_db()
        return self._db

    def _doc_ref(self):
        return self.db.collection(self.collection).document(self.key)

    def read(self):
        snapshot = self._doc_ref().get()
        if not snapshot.exists:
            return None
        return (snapshot.to_dict() or {}).get('data')

    def write(self, text):
        self._doc_ref().set({'data': text})


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class HubStore:
    def __init__(self, slot):
        self.slot = slot

    def load(self):
        """Return the persisted hub list, or [] when absent or malformed."""
        try:
            raw = self.slot.read()
        except Exception:
            logger.exception('Failed to read hub document %s', self.slot.key)
            return []

        if raw is None or raw == '':
            logger.debug('No hub document stored under %s', self.slot.key)
            return []

        try:
            records = json.loads(raw)
        except Exception as e:
            logger.warning('Discarding malformed hub document %s: %s', self.slot.key, e)
            return []

        if not isinstance(records, list):
            logger.warning('Discarding hub document %s: expected a list, got %s',
                           self.slot.key, type(records).__name__)
            return []

        try:
            hubs = [Hub.from_dict(r) for r in records]
        except Exception as e:
            logger.warning('Discarding hub document %s: %s', self.slot.key, e)
            return []

        logger.debug('Loaded %d hubs from %s', len(hubs), self.slot.key)
        return hubs

    def save(self, hubs):
        """Overwrite the stored document with the complete hub list."""
        text = json.dumps([h.to_dict() for h in hubs], ensure_ascii=False)
        self.slot.write(text)
        logger.debug('Saved %d hubs to %s', len(hubs), self.slot.key)


def create_store(config):
    backend = (config.get('STORE_BACKEND') or 'file').lower()
    key = config.get('STORE_KEY') or DEFAULT_KEY

    if backend == 'memory':
        slot = MemorySlot(key=key)
    elif backend == 'file':
        slot = FileSlot(config.get('STORE_PATH') or 'instance', key=key)
    elif backend == 'firestore':
        from scholarly.firebase_init import init_firebase
        init_firebase(config)
        slot = FirestoreSlot(collection=config.get('FIRESTORE_COLLECTION') or 'scholarly', key=key)
    else:
        raise ValueError(f'Unknown STORE_BACKEND: {backend}')

    logger.info('Using %s hub store (key=%s)', backend, key)
    return HubStore(slot)


def init_app(app, store=None):
    app.extensions[EXTENSION_KEY] = store or create_store(app.config)


def get_store():
    return current_app.extensions[EXTENSION_KEY]
