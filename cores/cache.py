# cores/cache.py
"""
Short-lived read-through cache for exam catalog reads.

Wraps a Django cache backend and adds prefix invalidation, which the stock
backends do not offer. Every prefix owns a version counter and data keys
embed the current version, so invalidating a prefix is a single atomic
``incr``; entries written under older versions are never read again and
expire on their own TTL.
"""
import logging
import time

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 120
EXAM_DETAIL_PREFIX = "exam_detail"
VERSION_PREFIX = "cache_version"


def exam_detail_prefix(exam_id):
    return f"{EXAM_DETAIL_PREFIX}:{exam_id}"


def exam_detail_key(exam_id, user_id=None, version=1):
    return f"{exam_detail_prefix(exam_id)}:v{version}:{user_id or 'anon'}"


def _fresh_version():
    # Larger than any counter an evicted version key could have reached
    return time.time_ns()


class ExamCache:
    def __init__(self, backend=None, default_ttl=DEFAULT_TTL_SECONDS):
        self.backend = backend if backend is not None else caches['default']
        self.default_ttl = default_ttl

    @staticmethod
    def version_key(prefix):
        return f"{VERSION_PREFIX}:{prefix}"

    def version(self, prefix):
        """Current version of ``prefix``, created on first use."""
        key = self.version_key(prefix)
        current = self.backend.get(key)
        if current is None:
            self.backend.add(key, _fresh_version(), timeout=None)
            current = self.backend.get(key)
        return current

    def get(self, key):
        if not key:
            return None
        return self.backend.get(key)

    def set(self, key, value, ttl_seconds=None):
        if not key:
            return
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        self.backend.set(key, value, timeout=ttl)

    def delete_by_prefix(self, prefix):
        """Retire every key written under ``prefix``. Returns the new version."""
        if not prefix:
            return None
        key = self.version_key(prefix)
        try:
            version = self.backend.incr(key)
        except ValueError:
            # Nothing was ever read under this prefix, or its counter was evicted
            version = _fresh_version()
            if not self.backend.add(key, version, timeout=None):
                version = self.backend.incr(key)
        logger.debug("Invalidated cache prefix %s (now v%s)", prefix, version)
        return version


def get_exam_cache():
    """Cache collaborator built from settings."""
    alias = getattr(settings, 'EXAM_CACHE_ALIAS', 'default')
    ttl = getattr(settings, 'EXAM_CACHE_TTL_SECONDS', DEFAULT_TTL_SECONDS)
    return ExamCache(backend=caches[alias], default_ttl=ttl)
