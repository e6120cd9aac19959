# jobs/email_utils.py
from django.conf import settings
from django.core.mail import EmailMessage

from .models import ApplicationStatus

DEFAULT_FROM = getattr(settings, "DEFAULT_FROM_EMAIL", "Job Board <no-reply@jobboard.local>")

STATUS_LINES = {
    ApplicationStatus.ACCEPTED.value: "Good news: your application has been accepted. The hiring team will contact you with next steps.",
    ApplicationStatus.REJECTED.value: "Thank you for your interest. After review, the team has decided not to move forward with your application.",
    ApplicationStatus.PENDING.value: "Your application is back under review.",
}


def _format_from_name():
    return getattr(settings, "DEFAULT_FROM_EMAIL", None) or DEFAULT_FROM


def send_status_email(application):
    """
    Tell the applicant their application status changed (plain text).
    """
    job = application.job
    subject = f"[{job.title}] Application update from {job.company}"
    lines = [
        f"Hi {application.applicant_name},",
        "",
        f"Your application for {job.title} at {job.company} is now: {application.get_status_display()}.",
        STATUS_LINES.get(str(application.status), ""),
        "",
        "We wish you all the best in your job search.",
    ]
    body = "\n".join(lines)

    email = EmailMessage(subject=subject, body=body, from_email=_format_from_name(), to=[application.applicant_email])
    email.send(fail_silently=False)
    return True
