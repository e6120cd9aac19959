# jobs/storage.py
import logging
import os
from collections import namedtuple

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from django.utils.text import get_valid_filename

from .exceptions import UploadFailed

logger = logging.getLogger(__name__)

StoredResume = namedtuple('StoredResume', ['name', 'url'])


def resume_max_bytes():
    return getattr(settings, 'JOBBOARD_RESUME_MAX_BYTES', 10 * 1024 * 1024)


def resume_extensions():
    return tuple(getattr(settings, 'JOBBOARD_RESUME_EXTENSIONS', ('pdf', 'doc', 'docx')))


def resume_prefix():
    return getattr(settings, 'JOBBOARD_RESUME_PREFIX', 'resumes')


def check_resume_policy(resume):
    """
    Reject files the sink should never see: empty, oversized or a disallowed type.
    Raises UploadFailed (400).
    """
    name = (getattr(resume, 'name', '') or '').strip()
    ext = os.path.splitext(name)[1].lower().lstrip('.')
    allowed = resume_extensions()
    if ext not in allowed:
        raise UploadFailed("Only %s files are allowed." % ', '.join(e.upper() for e in allowed))

    size = getattr(resume, 'size', None)
    if not size:
        raise UploadFailed("Resume file is empty.")
    limit = resume_max_bytes()
    if size > limit:
        raise UploadFailed("File size must be <= %d MB." % (limit // (1024 * 1024)))


class ResumeUploadSink:
    """
    Stores resume files in a Django storage backend and hands back a URL.
    The sink is not transactional with the database; callers delete() on rollback.
    """

    def __init__(self, storage=None):
        self.storage = storage or default_storage

    def upload(self, resume):
        check_resume_policy(resume)
        stamp = timezone.now().strftime('%Y%m%d%H%M%S%f')
        filename = get_valid_filename(os.path.basename(resume.name))
        target = f"{resume_prefix()}/{stamp}_{filename}"
        try:
            if hasattr(resume, 'seek'):
                resume.seek(0)
            name = self.storage.save(target, resume)
            url = self.storage.url(name)
        except Exception as exc:
            logger.exception("Resume upload failed for %s", target)
            raise UploadFailed("Resume storage unavailable.", status=500) from exc
        logger.info("Stored resume %s (%s bytes)", name, resume.size)
        return StoredResume(name=name, url=url)

    def delete(self, name):
        self.storage.delete(name)
        logger.info("Deleted resume blob %s", name)

    def list_blobs(self):
        """Yield names of every stored resume under the resume prefix."""
        prefix = resume_prefix()
        try:
            _dirs, files = self.storage.listdir(prefix)
        except FileNotFoundError:
            return
        for f in files:
            yield f"{prefix}/{f}"

    def url_for(self, name):
        return self.storage.url(name)

    def modified_at(self, name):
        return self.storage.get_modified_time(name)
