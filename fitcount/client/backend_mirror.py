# fitcount/client/backend_mirror.py

import logging
from threading import Thread
from queue import Queue

import requests

from fitcount import config

logger = logging.getLogger(__name__)


class BackendMirror:
    """
    Mirrors the local workout to the session service.

    Events are queued as (path, payload) pairs and posted by a background
    thread so the camera loop never blocks. Failures are logged and dropped.
    """

    def __init__(self, backend_url: str, timeout: float = config.REQUEST_TIMEOUT):
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout
        self.queue: Queue = Queue()

    def start(self):
        Thread(target=self.run, daemon=True).start()

    def run(self):
        while True:
            path, payload = self.queue.get()
            try:
                self._send(path, payload)
            finally:
                self.queue.task_done()

    def _send(self, path, payload):
        try:
            resp = requests.post(f"{self.backend_url}{path}", json=payload, timeout=self.timeout)
            if resp.status_code != 200:
                logger.warning("Backend rejected %s: %s %s", path, resp.status_code, resp.text)
        except requests.RequestException as e:
            logger.warning("Could not reach backend: %s", e)

    def drain(self):
        self.queue.join()

    # ---------- session events ----------

    def start_session(self):
        self.queue.put(("/session/start", None))

    def select_exercise(self, exercise):
        self.queue.put(("/exercise", {"exercise": exercise.value}))

    def report_count(self, exercise, count: int):
        self.queue.put(("/counts", {"exercise": exercise.value, "count": count}))

    def end_session(self):
        self.queue.put(("/session/end", None))
