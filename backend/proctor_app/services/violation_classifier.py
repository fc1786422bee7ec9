"""
Violation classifier - maps a wire violation type to severity and points
"""

from enum import Enum
from typing import Dict

from ..core.errors import InvalidViolationTypeError


class ViolationType(str, Enum):
    NO_FACE_DETECTED = "noFaceDetected"
    MULTIPLE_FACES = "multipleFaces"
    GAZE_AWAY = "gazeAway"
    EXIT_FULLSCREEN = "exitFullscreen"
    TAB_SWITCH = "tabSwitch"
    WINDOW_SWITCH = "windowSwitch"
    SUSPICIOUS_OBJECT = "suspiciousObject"
    AUDIO_DETECTED = "audioDetected"
    SCREEN_CAPTURE_DETECTED = "screenCaptureDetected"
    CAMERA_ACCESS_DENIED = "cameraAccessDenied"
    IDENTITY_VERIFIED = "identityVerified"
    DIFFERENT_PERSON = "differentPerson"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


VIOLATION_TYPES = frozenset(v.value for v in ViolationType)

SEVERITY_MAP: Dict[str, Severity] = {
    ViolationType.NO_FACE_DETECTED.value: Severity.MEDIUM,
    ViolationType.MULTIPLE_FACES.value: Severity.HIGH,
    ViolationType.DIFFERENT_PERSON.value: Severity.CRITICAL,
    ViolationType.GAZE_AWAY.value: Severity.LOW,
    ViolationType.EXIT_FULLSCREEN.value: Severity.CRITICAL,
    ViolationType.TAB_SWITCH.value: Severity.CRITICAL,
    ViolationType.WINDOW_SWITCH.value: Severity.CRITICAL,
    ViolationType.SUSPICIOUS_OBJECT.value: Severity.HIGH,
    ViolationType.CAMERA_ACCESS_DENIED.value: Severity.CRITICAL,
    ViolationType.IDENTITY_VERIFIED.value: Severity.LOW,
}

# audioDetected and screenCaptureDetected have no entry and score DEFAULT_POINTS
VIOLATION_POINTS: Dict[str, int] = {
    ViolationType.NO_FACE_DETECTED.value: 10,
    ViolationType.MULTIPLE_FACES.value: 35,
    ViolationType.DIFFERENT_PERSON.value: 40,
    ViolationType.GAZE_AWAY.value: 5,
    ViolationType.EXIT_FULLSCREEN.value: 20,
    ViolationType.TAB_SWITCH.value: 25,
    ViolationType.WINDOW_SWITCH.value: 25,
    ViolationType.SUSPICIOUS_OBJECT.value: 15,
    ViolationType.CAMERA_ACCESS_DENIED.value: 30,
    ViolationType.IDENTITY_VERIFIED.value: 0,
}

DEFAULT_SEVERITY = Severity.LOW
DEFAULT_POINTS = 5


def is_known_type(violation_type) -> bool:
    return isinstance(violation_type, str) and violation_type in VIOLATION_TYPES


def get_severity(violation_type: str) -> Severity:
    return SEVERITY_MAP.get(violation_type, DEFAULT_SEVERITY)


def get_points(violation_type: str) -> int:
    return VIOLATION_POINTS.get(violation_type, DEFAULT_POINTS)


def classify(violation_type: str) -> Severity:
    """
    Validate a violation type and return its severity tier.

    Raises:
        InvalidViolationTypeError: if the type is outside the wire enumeration
    """
    if not is_known_type(violation_type):
        raise InvalidViolationTypeError(violation_type)
    return get_severity(violation_type)
