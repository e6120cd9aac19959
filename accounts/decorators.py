from functools import wraps

from .identity import resolve_principal


def with_principal(view_func):
    """Attach the resolved Principal (or None) to request.principal."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        request.principal = resolve_principal(request)
        return view_func(request, *args, **kwargs)
    return _wrapped
