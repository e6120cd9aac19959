# jobs/management/commands/sweep_orphan_resumes.py
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from jobs.models import Application
from jobs.storage import ResumeUploadSink


class Command(BaseCommand):
    help = (
        "Delete stored resumes that no application references.\n\n"
        "A resume is uploaded before its application row is written, so a failed "
        "submission can leave a blob behind. Only blobs older than the grace period "
        "are removed, which keeps in-flight submissions safe."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            '--grace-hours', type=int,
            default=getattr(settings, 'JOBBOARD_ORPHAN_GRACE_HOURS', 24),
            help='Only delete blobs older than this many hours (default: %(default)s).',
        )
        parser.add_argument('--dry-run', action='store_true', help='Report orphans without deleting them.')

    def handle(self, *args, **options):
        grace_hours = options['grace_hours']
        dry_run = options['dry_run']
        if grace_hours < 0:
            raise CommandError("--grace-hours must be >= 0")

        sink = ResumeUploadSink()
        cutoff = timezone.now() - timedelta(hours=grace_hours)
        referenced = set(Application.objects.values_list('resume_url', flat=True))

        deleted = 0
        kept = 0
        errors = 0

        for name in sink.list_blobs():
            try:
                if sink.url_for(name) in referenced:
                    kept += 1
                    continue
                if sink.modified_at(name) > cutoff:
                    kept += 1
                    self.stdout.write(f"Too recent, kept: {name}")
                    continue
                if dry_run:
                    self.stdout.write(f"Orphan (dry run): {name}")
                else:
                    sink.delete(name)
                    self.stdout.write(f"Deleted orphan: {name}")
                deleted += 1
            except OSError as e:
                errors += 1
                self.stderr.write(f"ERROR on {name}: {e}")

        label = "Would delete" if dry_run else "Deleted"
        self.stdout.write(self.style.SUCCESS(f"Sweep finished. {label}={deleted}, Kept={kept}, Errors={errors}"))
