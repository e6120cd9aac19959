from django.contrib import admin
from .models import Job, Application


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'company', 'location', 'posted_by', 'created_at')
    list_filter = ('company',)
    search_fields = ('title', 'company', 'description', 'posted_by')


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ('applicant_name', 'applicant_id', 'job', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('applicant_id', 'applicant_email', 'job__title')
    # status changes go through the API so the owner check applies
    readonly_fields = ('job', 'applicant_id', 'resume_url', 'status', 'created_at', 'updated_at')
