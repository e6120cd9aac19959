# jobs/exceptions.py
"""
Errors raised by the job board core.

Every error carries a machine-readable ``code`` and the HTTP ``status`` the
API layer answers with; ``str(err)`` is the human-readable message.
"""


class JobBoardError(Exception):
    code = 'internal_error'
    status = 500

    def __init__(self, message=None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self):
        return "Internal server error"

    def as_dict(self):
        return {'error': self.code, 'message': self.message}


class ValidationError(JobBoardError):
    code = 'validation_error'
    status = 400

    def default_message(self):
        return "Invalid input"


class InvalidId(ValidationError):
    code = 'invalid_id'

    def default_message(self):
        return "Invalid id"


class NotFound(JobBoardError):
    code = 'not_found'
    status = 404

    def default_message(self):
        return "Not found"


class JobNotFound(NotFound):
    code = 'job_not_found'

    def default_message(self):
        return "Job not found"


class ApplicationNotFound(NotFound):
    code = 'application_not_found'

    def default_message(self):
        return "Application not found"


class DuplicateApplication(JobBoardError):
    code = 'duplicate_application'
    status = 409

    def default_message(self):
        return "You have already applied for this job"


class UploadFailed(JobBoardError):
    """Resume could not be stored. 400 for policy violations, 500 when the sink is down."""
    code = 'upload_failed'
    status = 400

    def __init__(self, message=None, status=None):
        super().__init__(message)
        if status is not None:
            self.status = status

    def default_message(self):
        return "Resume upload failed"


class Unauthorized(JobBoardError):
    code = 'unauthorized'
    status = 401

    def default_message(self):
        return "Authentication required"


class Forbidden(JobBoardError):
    code = 'forbidden'
    status = 403

    def default_message(self):
        return "Not allowed"


class InternalError(JobBoardError):
    pass
