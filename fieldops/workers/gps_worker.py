# fieldops/workers/gps_worker.py
import os
import logging

from rq import Worker, SimpleWorker

from fieldops.config import settings
from fieldops.rq_connection import redis_conn, gps_queue

if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    worker_cls = Worker if os.name != "nt" else SimpleWorker
    worker = worker_cls([gps_queue], connection=redis_conn)
    worker.work()
