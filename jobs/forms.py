# jobs/forms.py
from django import forms
from django.core.exceptions import NON_FIELD_ERRORS

from .exceptions import ValidationError
from .models import Application, Job


class JobForm(forms.ModelForm):
    class Meta:
        model = Job
        fields = ['title', 'company', 'location', 'description', 'posted_by']


class JobOwnerForm(forms.ModelForm):
    class Meta:
        model = Job
        fields = ['posted_by']


class ApplicationForm(forms.ModelForm):
    """
    Applicant details plus the resume file.
    Size and type of the resume are the upload sink's policy, so empty files pass here.
    """
    resume = forms.FileField(allow_empty_file=True)

    class Meta:
        model = Application
        fields = ['applicant_id', 'applicant_name', 'applicant_email', 'message']


def validated(form):
    """Return cleaned_data, or raise ValidationError naming every bad field."""
    if form.is_valid():
        return form.cleaned_data
    problems = []
    for field, messages in form.errors.items():
        label = 'input' if field == NON_FIELD_ERRORS else field
        problems.append("%s: %s" % (label, ' '.join(messages)))
    raise ValidationError("; ".join(problems))
