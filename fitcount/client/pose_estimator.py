# fitcount/client/pose_estimator.py

import os
import logging
os.environ['TF_CPP_MIN_LOG_LEVEL'] = '3'

import cv2
import mediapipe as mp

from fitcount import config

logger = logging.getLogger(__name__)

mp_pose = mp.solutions.pose


class PoseSourceError(RuntimeError):
    """Camera or pose model could not be brought up."""


def open_camera(index: int = config.CAMERA_INDEX):
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise PoseSourceError(
            f"Could not open camera {index}. Please check camera permissions."
        )
    return cap


class PoseEstimator:
    def __init__(
        self,
        min_detection_confidence: float = config.MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = config.MIN_TRACKING_CONFIDENCE,
    ):
        try:
            self.pose = mp_pose.Pose(
                static_image_mode=False,
                model_complexity=1,
                smooth_landmarks=True,
                enable_segmentation=False,
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=min_tracking_confidence,
            )
        except Exception as e:
            raise PoseSourceError(f"Error initializing pose detection: {e}") from e

    def process(self, frame_bgr):
        """
        Input: BGR frame from OpenCV.
        Output:
          - landmarks: the 33 normalized pose landmarks, or None if no person
          - pose_landmarks: MediaPipe landmark list (for drawing), or None
        """
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.pose.process(rgb)

        if not results.pose_landmarks:
            return None, None

        return list(results.pose_landmarks.landmark), results.pose_landmarks

    def close(self):
        self.pose.close()
