# jobs/workflow.py
"""
Application workflow: job posting, candidate submission, owner review.

submit():      validate -> resolve job -> duplicate pre-check -> upload resume -> persist
set_status():  validate status -> resolve application -> authorize owner -> write

The duplicate pre-check only exists to fail fast with a friendly error; the
unique constraint behind stores.create_application() is what guarantees one
application per (job, applicant) when submissions race.
"""
import logging

from django.conf import settings
from django.db import DatabaseError

from . import stores
from .email_utils import send_status_email
from .exceptions import DuplicateApplication, Forbidden, Unauthorized, ValidationError
from .forms import ApplicationForm, JobOwnerForm, validated
from .models import ApplicationStatus
from .storage import ResumeUploadSink

logger = logging.getLogger(__name__)

NOTIFY_ON = (ApplicationStatus.ACCEPTED.value, ApplicationStatus.REJECTED.value)


def _require_principal(principal):
    if principal is None:
        raise Unauthorized()
    return principal


def create_job(principal, title, company, location, description):
    principal = _require_principal(principal)
    job = stores.create_job(title, company, location, description, posted_by=principal.id)
    logger.info("Job %s created by %s", job.id, principal.id)
    return job


def submit(principal, job_id, name, email, message, resume, sink=None):
    principal = _require_principal(principal)
    applicant_id = principal.id
    if not str(job_id or '').strip():
        raise ValidationError("job: This field is required.")
    form = ApplicationForm(
        data={
            'applicant_id': applicant_id,
            'applicant_name': (name or '').strip() or principal.name,
            'applicant_email': email,
            'message': message,
        },
        files={'resume': resume},
    )
    cleaned = validated(form)

    job = stores.get_job(job_id)

    if stores.application_exists(job, applicant_id):
        raise DuplicateApplication()

    sink = sink or ResumeUploadSink()
    stored = sink.upload(resume)

    try:
        application = stores.create_application(
            job=job,
            applicant_id=applicant_id,
            applicant_name=cleaned['applicant_name'],
            applicant_email=cleaned['applicant_email'],
            message=cleaned['message'],
            resume_url=stored.url,
        )
    except (DuplicateApplication, DatabaseError):
        _discard_upload(sink, stored)
        raise

    logger.info("Application %s submitted for job %s by %s", application.id, job.id, applicant_id)
    return application


def _discard_upload(sink, stored):
    try:
        sink.delete(stored.name)
    except Exception:
        # left for the orphan sweep
        logger.warning("Could not delete orphaned resume %s", stored.name, exc_info=True)


def set_status(principal, application_id, new_status):
    principal = _require_principal(principal)
    new_status = (new_status or '').strip() if isinstance(new_status, str) else new_status
    if new_status not in ApplicationStatus.values:
        raise ValidationError("status must be one of: %s" % ', '.join(ApplicationStatus.values))

    application = stores.get_application(application_id)
    if application.job.posted_by != principal.id:
        logger.warning("Principal %s tried to change application %s on job %s owned by %s",
                       principal.id, application.id, application.job_id, application.job.posted_by)
        raise Forbidden("Only the job owner can change this application.")

    if application.status == new_status:
        return application

    previous = application.status
    stores.update_application_status(application, new_status)
    logger.info("Application %s status %s -> %s by %s", application.id, previous, new_status, principal.id)

    if new_status in NOTIFY_ON and getattr(settings, 'JOBBOARD_NOTIFY_APPLICANTS', True):
        try:
            send_status_email(application)
        except Exception:
            logger.exception("Failed to send status email for application %s", application.id)
    return application


def reassign_job_owner(principal, job_id, posted_by):
    principal = _require_principal(principal)
    if not principal.is_staff:
        raise Forbidden("Staff access required.")
    posted_by = validated(JobOwnerForm(data={'posted_by': posted_by}))['posted_by']
    job = stores.get_job(job_id)
    previous = job.posted_by
    stores.set_job_owner(job, posted_by)
    logger.info("Job %s owner %s -> %s by %s", job.id, previous, posted_by, principal.id)
    return job
