# jobboard/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Admin site (also serves the session login used by the API)
    path('admin/', admin.site.urls),

    # JSON API
    path('api/', include('jobs.urls', namespace='jobs')),
]

# Serve uploaded resumes in development (only when DEBUG=True)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
