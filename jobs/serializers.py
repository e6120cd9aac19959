# jobs/serializers.py
def _iso(dt):
    return dt.isoformat() if dt else None


def job_summary(job):
    return {
        'id': job.id,
        'title': job.title,
        'company': job.company,
        'location': job.location,
        'createdAt': _iso(job.created_at),
    }


def job_to_dict(job):
    data = job_summary(job)
    data.update({
        'description': job.description,
        'postedBy': job.posted_by,
        'updatedAt': _iso(job.updated_at),
    })
    return data


def application_to_dict(app):
    return {
        'id': app.id,
        'job': job_summary(app.job),
        'applicantId': app.applicant_id,
        'name': app.applicant_name,
        'email': app.applicant_email,
        'message': app.message,
        'resumeUrl': app.resume_url,
        'status': str(app.status),
        'createdAt': _iso(app.created_at),
        'updatedAt': _iso(app.updated_at),
    }
