# fitcount/client/rep_demo.py

import time
import logging

import cv2
import mediapipe as mp

from fitcount import config
from fitcount.client.backend_mirror import BackendMirror
from fitcount.client.pose_estimator import PoseEstimator, PoseSourceError, open_camera
from fitcount.client.rep_logic import ExerciseType
from fitcount.client.session import WorkoutSession, format_time, log_summary

logger = logging.getLogger(__name__)

# MediaPipe drawing helpers
mp_drawing = mp.solutions.drawing_utils
mp_pose = mp.solutions.pose

WINDOW_NAME = "fitcount"

# ---------- Exercise options ----------
EXERCISE_OPTIONS = {
    "1": ExerciseType.SQUAT,
    "2": ExerciseType.PUSHUP,
    "3": ExerciseType.BICEP_CURL,
}


def choose_exercise() -> ExerciseType:
    print("Select exercise to track:")
    for key, exercise in EXERCISE_OPTIONS.items():
        print(f"  {key}. {exercise.display_name}")
    choice = input("Enter 1, 2, or 3: ").strip()
    exercise = EXERCISE_OPTIONS.get(choice, ExerciseType.SQUAT)
    print(f"\nYou selected: {exercise.display_name}\n")
    return exercise


def draw_overlay(display_frame, session: WorkoutSession, state):
    cv2.putText(display_frame,
                f"Exercise: {session.exercise.display_name}",
                (20, 30),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.7,
                (200, 255, 200),
                2)
    cv2.putText(display_frame,
                f"Reps: {state.count}",
                (20, 60),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.9,
                (0, 255, 0),
                2)
    cv2.putText(display_frame,
                f"Time: {format_time(session.timer.elapsed_seconds)}",
                (20, 90),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.7,
                (0, 255, 255),
                2)

    # Confidence bar
    bar_width = 200
    cv2.rectangle(display_frame, (20, 105), (20 + bar_width, 120), (80, 80, 80), 1)
    cv2.rectangle(display_frame,
                  (20, 105),
                  (20 + int(bar_width * state.confidence), 120),
                  (0, 200, 0),
                  -1)

    if state.feedback:
        cv2.putText(display_frame,
                    state.feedback,
                    (20, display_frame.shape[0] - 30),
                    cv2.FONT_HERSHEY_SIMPLEX,
                    0.7,
                    (0, 200, 255),
                    2)


def main():
    config.configure_logging()

    # 1) Choose exercise
    session = WorkoutSession()
    session.select_exercise(choose_exercise())

    # 2) Start camera + pose model
    try:
        cap = open_camera()
        pose_estimator = PoseEstimator()
    except PoseSourceError as e:
        logger.error("%s", e)
        return

    # 3) Mirror the workout to the backend, if one is configured
    mirror = None
    if config.BACKEND_URL:
        mirror = BackendMirror(config.BACKEND_URL)
        mirror.start()
        session.on_rep = mirror.report_count   # returns instantly

    # 4) Countdown before tracking
    countdown_start = time.time()
    countdown_done = False

    logger.info("Get into position... starting in %d seconds.", config.COUNTDOWN_SECONDS)

    while True:
        ret, frame = cap.read()
        if not ret:
            logger.error("Camera stopped delivering frames.")
            break

        display_frame = frame.copy()

        # ---------- PHASE 1: Countdown ----------
        if not countdown_done:
            elapsed = time.time() - countdown_start
            remaining = config.COUNTDOWN_SECONDS - int(elapsed)

            if remaining > 0:
                cv2.putText(display_frame,
                            f"Get ready: {remaining}",
                            (60, 100),
                            cv2.FONT_HERSHEY_SIMPLEX,
                            1.2,
                            (0, 255, 255),
                            3)
            else:
                countdown_done = True
                session.start_session()
                if mirror:
                    mirror.start_session()
                    mirror.select_exercise(session.exercise)
                logger.info("Go! Tracking reps now.")

            cv2.imshow(WINDOW_NAME, display_frame)
            if cv2.waitKey(1) & 0xFF == ord('q'):
                break
            continue

        # ---------- PHASE 2: Pose + rep tracking ----------
        landmarks, pose_landmarks = pose_estimator.process(frame)

        if pose_landmarks:
            mp_drawing.draw_landmarks(
                display_frame,
                pose_landmarks,
                mp_pose.POSE_CONNECTIONS,
                landmark_drawing_spec=mp_drawing.DrawingSpec(
                    color=(0, 255, 0), thickness=2, circle_radius=2
                ),
                connection_drawing_spec=mp_drawing.DrawingSpec(
                    color=(255, 0, 0), thickness=2
                ),
            )

        if landmarks is not None:
            state = session.process_frame(landmarks)
        else:
            state = session.state_for(session.exercise)

        draw_overlay(display_frame, session, state)

        cv2.imshow(WINDOW_NAME, display_frame)
        key = chr(cv2.waitKey(1) & 0xFF)
        if key == 'q':
            break
        if key in EXERCISE_OPTIONS:
            session.select_exercise(EXERCISE_OPTIONS[key])
            if mirror:
                mirror.select_exercise(session.exercise)

    pose_estimator.close()
    cap.release()
    cv2.destroyAllWindows()

    if session.active:
        log_summary(session.end_session())
        if mirror:
            mirror.end_session()
            mirror.drain()


if __name__ == "__main__":
    main()
