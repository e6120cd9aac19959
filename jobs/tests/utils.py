# jobs/tests/utils.py
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings

from accounts.identity import Principal

MB = 1024 * 1024

IN_MEMORY_STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.InMemoryStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

OWNER = Principal(id='u1', name='Olivia Owner')
APPLICANT = Principal(id='u2', name='Dana')
STAFF = Principal(id='ops', name='Ops', is_staff=True)


def resume_file(name='resume.pdf', size=1024, content_type='application/pdf'):
    return SimpleUploadedFile(name, b'%' * size, content_type=content_type)


class InMemoryStorageMixin:
    """Fresh in-memory resume storage for every test."""

    def setUp(self):
        super().setUp()
        override = override_settings(STORAGES=IN_MEMORY_STORAGES)
        override.enable()
        self.addCleanup(override.disable)
