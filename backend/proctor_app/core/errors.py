"""Exceptions raised by the proctoring engine.

The HTTP layer maps each class to a status code in ``main.py``.
"""


class ProctoringError(Exception):
    status_code = 500
    error = "Proctoring error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionNotFoundError(ProctoringError):
    status_code = 404
    error = "Session not found"

    def __init__(self, session_id: str):
        super().__init__(f"Proctoring session {session_id} not found")
        self.session_id = session_id


class InvalidViolationTypeError(ProctoringError, ValueError):
    status_code = 400
    error = "Invalid violation type"

    def __init__(self, violation_type):
        super().__init__(f"Unknown violation type: {violation_type!r}")
        self.violation_type = violation_type


class InvalidSessionStatusError(ProctoringError, ValueError):
    status_code = 400
    error = "Invalid session status"

    def __init__(self, status):
        super().__init__(f"Cannot end a session with status {status!r}")
        self.status = status


class SessionClosedError(ProctoringError):
    status_code = 409
    error = "Session closed"

    def __init__(self, session_id: str, status: str):
        super().__init__(f"Proctoring session {session_id} has already ended ({status})")
        self.session_id = session_id
        self.status = status


class StorageError(ProctoringError):
    status_code = 503
    error = "Storage error"


class ConcurrentModificationError(StorageError):
    status_code = 409
    error = "Concurrent modification"
