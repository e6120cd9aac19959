# jobs/views.py
import json
import logging
from functools import wraps

from django.db import DatabaseError
from django.http import JsonResponse

from accounts.decorators import with_principal

from . import stores, workflow
from .exceptions import Forbidden, InternalError, JobBoardError, Unauthorized, ValidationError
from .models import ApplicationStatus
from .serializers import application_to_dict, job_to_dict

logger = logging.getLogger(__name__)


def api_view(methods):
    """
    JSON endpoint wrapper: method check, principal lookup, and translation of
    JobBoardError / database failures into {"error", "message"} responses.
    """
    def decorator(view_func):
        @wraps(view_func)
        @with_principal
        def _wrapped(request, *args, **kwargs):
            if request.method not in methods:
                resp = JsonResponse({'error': 'method_not_allowed', 'message': "Method not allowed"}, status=405)
                resp['Allow'] = ', '.join(methods)
                return resp
            try:
                return view_func(request, *args, **kwargs)
            except JobBoardError as err:
                if err.status >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, err)
                return JsonResponse(err.as_dict(), status=err.status)
            except DatabaseError:
                logger.exception("Storage failure on %s %s", request.method, request.path)
                err = InternalError()
                return JsonResponse(err.as_dict(), status=err.status)
        return _wrapped
    return decorator


def _json_body(request):
    try:
        payload = json.loads(request.body.decode('utf-8') or 'null')
    except (UnicodeDecodeError, ValueError):
        raise ValidationError("Invalid JSON")
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON")
    return payload


def _payload(request):
    if request.content_type == 'application/json':
        return _json_body(request)
    return request.POST


def _int_param(params, name, default=None):
    raw = (params.get(name) or '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def _status_param(params):
    status = (params.get('status') or '').strip()
    if status and status not in ApplicationStatus.values:
        raise ValidationError("status must be one of: %s" % ', '.join(ApplicationStatus.values))
    return status


def _require(principal):
    if principal is None:
        raise Unauthorized()
    return principal


# -------------------------
# Jobs
# -------------------------
@api_view(['GET', 'POST'])
def jobs_endpoint(request):
    if request.method == 'POST':
        data = _payload(request)
        job = workflow.create_job(
            request.principal,
            title=data.get('title'),
            company=data.get('company'),
            location=data.get('location'),
            description=data.get('description'),
        )
        return JsonResponse(job_to_dict(job), status=201)

    job_id = request.GET.get('id')
    if job_id:
        return JsonResponse(job_to_dict(stores.get_job(job_id)))

    skip, limit = stores.page_bounds(
        _int_param(request.GET, 'skip', 0),
        _int_param(request.GET, 'limit'),
    )
    items, total = stores.list_jobs(
        query=request.GET.get('q', ''),
        location=request.GET.get('location', ''),
        company=request.GET.get('company', ''),
        posted_by=request.GET.get('postedBy', ''),
        skip=skip,
        limit=limit,
    )
    return JsonResponse({
        'items': [job_to_dict(j) for j in items],
        'total': total,
        'page': skip // limit + 1,
        'pageSize': limit,
    })


@api_view(['GET'])
def job_detail(request, job_id):
    return JsonResponse(job_to_dict(stores.get_job(job_id)))


# -------------------------
# Applications
# -------------------------
def _owner_applications(request, principal):
    owner = (request.GET.get('postedBy') or '').strip() or principal.id
    if owner != principal.id:
        raise Forbidden("You can only review applications for your own jobs.")
    status = _status_param(request.GET)
    owned = stores.job_ids_posted_by(owner)
    job_id = (request.GET.get('jobId') or '').strip()
    if job_id:
        pk = stores.parse_id(job_id, 'job id')
        owned = [pk] if pk in owned else []
    return stores.find_applications(job_in=owned, status=status)


def _own_applications(request, principal):
    user_id = (request.GET.get('userId') or '').strip() or principal.id
    if user_id != principal.id:
        raise Forbidden("You can only list your own applications.")
    status = _status_param(request.GET)
    job_id = (request.GET.get('jobId') or '').strip()
    job = stores.parse_id(job_id, 'job id') if job_id else None
    return stores.find_applications(job=job, status=status, applicant_id=user_id)


def _patch_status(request):
    data = _json_body(request)
    application_id = data.get('applicationId')
    if not application_id:
        raise ValidationError("applicationId and valid status required")
    application = workflow.set_status(request.principal, application_id, data.get('status'))
    return JsonResponse({'message': 'Status updated', 'application': application_to_dict(application)})


@api_view(['GET', 'POST', 'PATCH'])
def applications_endpoint(request):
    principal = _require(request.principal)

    if request.method == 'PATCH':
        return _patch_status(request)

    if request.method == 'POST':
        claimed = (request.POST.get('userId') or '').strip()
        if claimed and claimed != principal.id:
            raise Forbidden("You can only apply as yourself.")
        application = workflow.submit(
            principal,
            job_id=request.POST.get('job') or request.POST.get('jobId'),
            name=request.POST.get('name'),
            email=request.POST.get('email'),
            message=request.POST.get('message'),
            resume=request.FILES.get('resume'),
        )
        return JsonResponse(application_to_dict(application), status=201)

    if request.GET.get('postedBy'):
        apps = _owner_applications(request, principal)
    else:
        apps = _own_applications(request, principal)
    return JsonResponse([application_to_dict(a) for a in apps], safe=False)


@api_view(['GET', 'PATCH'])
def admin_applications(request):
    principal = _require(request.principal)
    if request.method == 'PATCH':
        return _patch_status(request)
    apps = _owner_applications(request, principal)
    return JsonResponse([application_to_dict(a) for a in apps], safe=False)


@api_view(['PATCH'])
def admin_job_owner(request):
    principal = _require(request.principal)
    data = _json_body(request)
    job = workflow.reassign_job_owner(principal, data.get('jobId'), data.get('postedBy'))
    return JsonResponse({'ok': True, 'job': job_to_dict(job)})
