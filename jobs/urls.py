# jobs/urls.py
from django.urls import path
from . import views

app_name = 'jobs'

urlpatterns = [
    # jobs: list / single (?id=) / create
    path('jobs/', views.jobs_endpoint, name='jobs'),                       # /api/jobs/
    path('jobs/<str:job_id>/', views.job_detail, name='job_detail'),       # /api/jobs/123/

    # applications: list (?userId= | ?postedBy=) / submit / status update
    path('applications/', views.applications_endpoint, name='applications'),

    # job owner review
    path('admin/applications/', views.admin_applications, name='admin_applications'),
    path('admin/jobs/owner/', views.admin_job_owner, name='admin_job_owner'),
]
