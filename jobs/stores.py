# jobs/stores.py
"""
Persistence for jobs and applications.

Thin functions over the ORM. The (job, applicant_id) uniqueness of
applications is carried by the database constraint, and create_application()
is the one place that translates a violation into DuplicateApplication.
"""
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q

from .exceptions import (
    ApplicationNotFound,
    DuplicateApplication,
    InvalidId,
    JobNotFound,
)
from .forms import JobForm, validated
from .models import Application, ApplicationStatus, Job

logger = logging.getLogger(__name__)


def parse_id(raw, label='id'):
    """Store ids are positive integers; anything else is malformed."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise InvalidId(f"Invalid {label}")
    if value <= 0:
        raise InvalidId(f"Invalid {label}")
    return value


def _clean(value):
    return '' if value is None else str(value).strip()


# -------------------------
# Job store
# -------------------------
def create_job(title, company, location, description, posted_by):
    form = JobForm(data={
        'title': title,
        'company': company,
        'location': location,
        'description': description,
        'posted_by': posted_by,
    })
    validated(form)
    return form.save()


def get_job(job_id):
    pk = parse_id(job_id, 'job id')
    try:
        return Job.objects.get(pk=pk)
    except Job.DoesNotExist:
        raise JobNotFound()


def page_bounds(skip=None, limit=None):
    """Clamp skip to >= 0 and limit to [1, max page size]."""
    default_size = getattr(settings, 'JOBBOARD_JOBS_DEFAULT_PAGE_SIZE', 10)
    max_size = getattr(settings, 'JOBBOARD_JOBS_MAX_PAGE_SIZE', 50)
    skip = max(int(skip or 0), 0)
    limit = default_size if limit is None else int(limit)
    limit = min(max(limit, 1), max_size)
    return skip, limit


def list_jobs(query='', location='', company='', posted_by='', skip=0, limit=None):
    """
    Filtered, newest-first page of jobs.
    Returns (items, total) where total counts every match, not just the page.
    """
    qs = Job.objects.all()
    query = _clean(query)
    if query:
        qs = qs.filter(
            Q(title__icontains=query) |
            Q(description__icontains=query) |
            Q(company__icontains=query) |
            Q(location__icontains=query)
        )
    if _clean(location):
        qs = qs.filter(location=_clean(location))
    if _clean(company):
        qs = qs.filter(company=_clean(company))
    if _clean(posted_by):
        qs = qs.filter(posted_by=_clean(posted_by))

    skip, limit = page_bounds(skip, limit)
    total = qs.count()
    items = list(qs[skip:skip + limit]) if skip < total else []
    return items, total


def job_ids_posted_by(posted_by):
    return list(Job.objects.filter(posted_by=posted_by).values_list('id', flat=True))


def set_job_owner(job, posted_by):
    job.posted_by = posted_by
    job.save(update_fields=['posted_by', 'updated_at'])
    return job


# -------------------------
# Application store
# -------------------------
def application_exists(job, applicant_id):
    return Application.objects.filter(job=job, applicant_id=applicant_id).exists()


def create_application(job, applicant_id, applicant_name, applicant_email, message, resume_url):
    try:
        with transaction.atomic():
            return Application.objects.create(
                job=job,
                applicant_id=applicant_id,
                applicant_name=applicant_name,
                applicant_email=applicant_email,
                message=message or '',
                resume_url=resume_url,
                status=ApplicationStatus.PENDING,
            )
    except IntegrityError:
        if Application.objects.filter(job=job, applicant_id=applicant_id).exists():
            logger.info("Duplicate application for job %s by %s rejected by constraint", job.pk, applicant_id)
            raise DuplicateApplication()
        raise


def find_applications(job=None, job_in=None, status=None, applicant_id=None):
    qs = Application.objects.select_related('job')
    if job is not None:
        qs = qs.filter(job=job)
    if job_in is not None:
        qs = qs.filter(job__in=list(job_in))
    if status:
        qs = qs.filter(status=status)
    if applicant_id:
        qs = qs.filter(applicant_id=applicant_id)
    return list(qs)


def get_application(application_id):
    pk = parse_id(application_id, 'application id')
    try:
        return Application.objects.select_related('job').get(pk=pk)
    except Application.DoesNotExist:
        raise ApplicationNotFound()


def update_application_status(application, status):
    """Single-field write; job, applicant, resume and created_at are left alone."""
    application.status = status
    application.save(update_fields=['status', 'updated_at'])
    return application
