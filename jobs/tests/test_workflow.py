# jobs/tests/test_workflow.py
import threading
from unittest import mock

from django.core import mail
from django.core.files.storage import InMemoryStorage, default_storage
from django.db import OperationalError, connection
from django.test import TestCase, TransactionTestCase, override_settings

from jobs import stores, workflow
from jobs.exceptions import (
    ApplicationNotFound,
    DuplicateApplication,
    Forbidden,
    InvalidId,
    JobNotFound,
    Unauthorized,
    UploadFailed,
    ValidationError,
)
from jobs.models import Application
from jobs.storage import ResumeUploadSink

from .utils import APPLICANT, MB, OWNER, STAFF, InMemoryStorageMixin, resume_file


class BrokenStorage(InMemoryStorage):
    def _save(self, name, content):
        raise OSError("bucket unavailable")


def stored_resumes():
    if not default_storage.exists('resumes'):
        return []
    return default_storage.listdir('resumes')[1]


class CreateJobTest(TestCase):
    def test_owner_comes_from_principal(self):
        job = workflow.create_job(OWNER, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')
        self.assertEqual(job.posted_by, 'u1')

    def test_anonymous_cannot_post(self):
        with self.assertRaises(Unauthorized):
            workflow.create_job(None, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')


class SubmitTest(InMemoryStorageMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.job = workflow.create_job(OWNER, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')

    def submit(self, principal=APPLICANT, job_id=None, name='Dana', email='dana@x.com', message='Hi', resume=None, **kwargs):
        return workflow.submit(
            principal,
            job_id=self.job.id if job_id is None else job_id,
            name=name,
            email=email,
            message=message,
            resume=resume_file() if resume is None else resume,
            **kwargs
        )

    def test_submit_creates_pending_application(self):
        app = self.submit(message='  Looking forward  ')
        self.assertEqual(app.status, 'pending')
        self.assertEqual(app.applicant_id, 'u2')
        self.assertEqual(app.message, 'Looking forward')
        self.assertTrue(app.resume_url.startswith('/media/resumes/'))
        self.assertEqual(len(stored_resumes()), 1)

    def test_name_defaults_to_principal_display_name(self):
        app = self.submit(name='   ')
        self.assertEqual(app.applicant_name, 'Dana')

    def test_required_fields(self):
        with self.assertRaises(ValidationError):
            self.submit(email='')
        with self.assertRaises(ValidationError):
            self.submit(job_id='')
        with self.assertRaises(ValidationError):
            workflow.submit(APPLICANT, self.job.id, 'Dana', 'dana@x.com', '', None)
        with self.assertRaises(ValidationError):
            self.submit(email='not-an-email')
        self.assertEqual(Application.objects.count(), 0)

    def test_overlong_details_rejected_before_upload(self):
        with self.assertRaises(ValidationError) as ctx:
            self.submit(name='N' * 400, email='%s@x.com' % ('d' * 260))
        self.assertIn('applicant_name', str(ctx.exception))
        self.assertIn('applicant_email', str(ctx.exception))
        self.assertEqual(Application.objects.count(), 0)
        self.assertEqual(stored_resumes(), [])

    def test_anonymous_cannot_apply(self):
        with self.assertRaises(Unauthorized):
            self.submit(principal=None)

    def test_missing_job_creates_nothing(self):
        with self.assertRaises(JobNotFound):
            self.submit(job_id=self.job.id + 1000)
        with self.assertRaises(InvalidId):
            self.submit(job_id='not-an-id')
        self.assertEqual(Application.objects.count(), 0)
        self.assertEqual(stored_resumes(), [])

    def test_second_submission_is_duplicate(self):
        self.submit()
        with self.assertRaises(DuplicateApplication):
            self.submit()
        self.assertEqual(Application.objects.count(), 1)
        self.assertEqual(len(stored_resumes()), 1)

    def test_constraint_catches_race_missed_by_precheck(self):
        first = self.submit()
        # the other request passed its pre-check before this row was committed
        with mock.patch('jobs.workflow.stores.application_exists', return_value=False):
            with self.assertRaises(DuplicateApplication):
                self.submit()
        self.assertEqual(list(Application.objects.all()), [first])
        # the second upload was rolled back
        self.assertEqual(len(stored_resumes()), 1)
        self.assertTrue(first.resume_url.endswith(stored_resumes()[0]))

    def test_database_failure_discards_upload(self):
        with mock.patch('jobs.workflow.stores.create_application', side_effect=OperationalError("db down")):
            with self.assertRaises(OperationalError):
                self.submit()
        self.assertEqual(stored_resumes(), [])

    def test_resume_of_exactly_limit_is_accepted(self):
        app = self.submit(resume=resume_file(size=10 * MB))
        self.assertEqual(app.status, 'pending')

    def test_resume_over_limit_is_rejected_before_upload(self):
        with self.assertRaises(UploadFailed) as ctx:
            self.submit(resume=resume_file(size=10 * MB + 1))
        self.assertEqual(ctx.exception.status, 400)
        self.assertEqual(Application.objects.count(), 0)
        self.assertEqual(stored_resumes(), [])

    def test_resume_type_policy(self):
        for name in ('cv.doc', 'cv.DOCX', 'cv.pdf'):
            Application.objects.all().delete()
            self.submit(resume=resume_file(name=name))
        for name in ('cv.exe', 'cv.txt', 'cv'):
            with self.assertRaises(UploadFailed):
                self.submit(principal=OWNER, resume=resume_file(name=name))

    def test_empty_resume_rejected(self):
        with self.assertRaises(UploadFailed):
            self.submit(resume=resume_file(size=0))

    def test_sink_failure_is_upload_failed_500(self):
        with self.assertRaises(UploadFailed) as ctx:
            self.submit(sink=ResumeUploadSink(storage=BrokenStorage()))
        self.assertEqual(ctx.exception.status, 500)
        self.assertEqual(Application.objects.count(), 0)


class ConcurrentSubmitTest(InMemoryStorageMixin, TransactionTestCase):
    def setUp(self):
        super().setUp()
        self.job = workflow.create_job(OWNER, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')

    def test_simultaneous_duplicates_yield_one_application(self):
        # both requests have passed the pre-check and uploaded before either inserts
        barrier = threading.Barrier(2, timeout=10)
        create_application = stores.create_application

        def create_together(**kwargs):
            barrier.wait()
            return create_application(**kwargs)

        outcomes = []

        def attempt(filename):
            try:
                outcomes.append(workflow.submit(APPLICANT, self.job.id, 'Dana', 'dana@x.com', '', resume_file(name=filename)))
            except Exception as exc:
                outcomes.append(exc)
            finally:
                connection.close()

        with mock.patch('jobs.workflow.stores.create_application', side_effect=create_together):
            threads = [threading.Thread(target=attempt, args=(name,)) for name in ('first.pdf', 'second.pdf')]
            for t in threads:
                t.start()
            for t in threads:
                t.join(30)

        created = [o for o in outcomes if isinstance(o, Application)]
        rejected = [o for o in outcomes if not isinstance(o, Application)]
        self.assertEqual(len(created), 1, outcomes)
        self.assertEqual(len(rejected), 1, outcomes)
        self.assertIsInstance(rejected[0], DuplicateApplication)
        self.assertEqual(list(Application.objects.values_list('id', flat=True)), [created[0].id])


class SetStatusTest(InMemoryStorageMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.job = workflow.create_job(OWNER, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')
        self.app = workflow.submit(APPLICANT, self.job.id, 'Dana', 'dana@x.com', '', resume_file())

    def test_every_transition_is_allowed(self):
        statuses = ['pending', 'accepted', 'rejected']
        for start in statuses:
            for target in statuses:
                workflow.set_status(OWNER, self.app.id, start)
                app = workflow.set_status(OWNER, self.app.id, target)
                self.assertEqual(app.status, target)
                self.app.refresh_from_db()
                self.assertEqual(self.app.status, target)

    def test_same_status_is_a_noop(self):
        first = workflow.set_status(OWNER, self.app.id, 'accepted')
        updated_at = Application.objects.get(pk=self.app.id).updated_at
        mail.outbox.clear()
        again = workflow.set_status(OWNER, self.app.id, 'accepted')
        self.assertEqual(again.status, first.status)
        self.assertEqual(Application.objects.get(pk=self.app.id).updated_at, updated_at)
        self.assertEqual(mail.outbox, [])

    def test_invalid_status(self):
        for bad in ('approved', '', None, 'ACCEPTED'):
            with self.assertRaises(ValidationError):
                workflow.set_status(OWNER, self.app.id, bad)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, 'pending')

    def test_unknown_application(self):
        with self.assertRaises(ApplicationNotFound):
            workflow.set_status(OWNER, self.app.id + 1000, 'accepted')

    def test_only_job_owner_may_change_status(self):
        for principal in (APPLICANT, STAFF):
            with self.assertRaises(Forbidden):
                workflow.set_status(principal, self.app.id, 'accepted')
        with self.assertRaises(Unauthorized):
            workflow.set_status(None, self.app.id, 'accepted')
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, 'pending')

    def test_applicant_is_emailed_on_decision(self):
        workflow.set_status(OWNER, self.app.id, 'accepted')
        self.assertEqual(len(mail.outbox), 1)
        msg = mail.outbox[0]
        self.assertEqual(msg.to, ['dana@x.com'])
        self.assertIn('Backend Engineer', msg.subject)
        self.assertIn('Accepted', msg.body)

        mail.outbox.clear()
        workflow.set_status(OWNER, self.app.id, 'pending')
        self.assertEqual(mail.outbox, [])

    @override_settings(JOBBOARD_NOTIFY_APPLICANTS=False)
    def test_notifications_can_be_disabled(self):
        workflow.set_status(OWNER, self.app.id, 'rejected')
        self.assertEqual(mail.outbox, [])

    def test_mail_failure_keeps_status_change(self):
        with mock.patch('jobs.workflow.send_status_email', side_effect=OSError("smtp down")):
            app = workflow.set_status(OWNER, self.app.id, 'rejected')
        self.assertEqual(app.status, 'rejected')
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, 'rejected')


class ReassignOwnerTest(TestCase):
    def setUp(self):
        self.job = workflow.create_job(OWNER, 'Backend Engineer', 'Acme', 'Remote', 'Build APIs')

    def test_staff_can_reassign(self):
        job = workflow.reassign_job_owner(STAFF, self.job.id, ' u9 ')
        self.assertEqual(job.posted_by, 'u9')
        self.job.refresh_from_db()
        self.assertEqual(self.job.posted_by, 'u9')

    def test_non_staff_forbidden(self):
        with self.assertRaises(Forbidden):
            workflow.reassign_job_owner(OWNER, self.job.id, 'u9')

    def test_requires_new_owner(self):
        with self.assertRaises(ValidationError):
            workflow.reassign_job_owner(STAFF, self.job.id, '  ')
        with self.assertRaises(ValidationError):
            workflow.reassign_job_owner(STAFF, self.job.id, 'u' * 151)
        with self.assertRaises(JobNotFound):
            workflow.reassign_job_owner(STAFF, self.job.id + 1, 'u9')
