# fieldops/rq_connection.py
import redis
from rq import Queue

from .config import settings

redis_conn = redis.from_url(settings.REDIS_URL)

# Deferred GPS re-reconciliation of finalized assignments
gps_queue = Queue("gps", connection=redis_conn)
