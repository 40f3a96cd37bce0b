# fitcount/config.py

import os
import logging
import dotenv
dotenv.load_dotenv()

BACKEND_URL = os.getenv("FITCOUNT_BACKEND_URL", "")
CAMERA_INDEX = int(os.getenv("FITCOUNT_CAMERA_INDEX", "0"))
COUNTDOWN_SECONDS = int(os.getenv("FITCOUNT_COUNTDOWN_SECONDS", "5"))
REQUEST_TIMEOUT = float(os.getenv("FITCOUNT_REQUEST_TIMEOUT", "2.0"))

MIN_DETECTION_CONFIDENCE = float(os.getenv("FITCOUNT_MIN_DETECTION_CONFIDENCE", "0.5"))
MIN_TRACKING_CONFIDENCE = float(os.getenv("FITCOUNT_MIN_TRACKING_CONFIDENCE", "0.5"))

LOG_LEVEL = os.getenv("FITCOUNT_LOG_LEVEL", "INFO")


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
