# jobs/models.py
from django.db import models


class Job(models.Model):
    title = models.CharField(max_length=255)
    company = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    description = models.TextField()
    # principal id of the owner; ownership gates status changes on its applications
    posted_by = models.CharField(max_length=150)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['location'], name='job_location_idx'),
            models.Index(fields=['company'], name='job_company_idx'),
            models.Index(fields=['posted_by'], name='job_posted_by_idx'),
        ]

    def __str__(self):
        return f"{self.title} @ {self.company}"


class ApplicationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'


class Application(models.Model):
    job = models.ForeignKey(Job, on_delete=models.PROTECT, related_name='applications')
    applicant_id = models.CharField(max_length=150)
    applicant_name = models.CharField(max_length=255)
    applicant_email = models.EmailField()
    message = models.TextField(blank=True)
    resume_url = models.CharField(max_length=1024)
    status = models.CharField(max_length=16, choices=ApplicationStatus.choices, default=ApplicationStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['job', 'applicant_id'], name='unique_application_per_applicant'),
            models.CheckConstraint(
                condition=models.Q(status__in=ApplicationStatus.values),
                name='application_status_valid',
            ),
        ]

    def __str__(self):
        return f"{self.applicant_name} -> {self.job.title} ({self.status})"
