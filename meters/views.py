import functools
import json
import logging

from django.contrib.auth import authenticate
from django.db import DatabaseError
from django.http import JsonResponse, QueryDict
from django.http.multipartparser import MultiPartParser, MultiPartParserError
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .exceptions import (
    CustomerNotFound, InvalidInput, MeterBillingError, RateNotFound, StorageFailure
)
from .forms import LoginForm, ProfileForm, ReadingSubmissionForm
from .models import StaffProfile
from .services import DashboardService, ReadingBillingService
from .stores import DjangoCustomerDirectory, DjangoRateStore, DjangoReadingStore

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidInput:     400,
    CustomerNotFound: 404,
    RateNotFound:     404,
    StorageFailure:   500,
}


def billing_service():
    return ReadingBillingService(
        customers = DjangoCustomerDirectory(),
        rates     = DjangoRateStore(),
        readings  = DjangoReadingStore(),
    )


def dashboard_service():
    return DashboardService(
        customers = DjangoCustomerDirectory(),
        readings  = DjangoReadingStore(),
    )


def error_response(message, status, code):
    return JsonResponse({'error': message, 'code': code}, status=status)


def billing_error_response(exc):
    status = ERROR_STATUS.get(type(exc), 500)
    return error_response(str(exc), status, exc.code)


def request_data(request):
    """Body of a JSON, urlencoded or multipart request as a dict-like object."""
    if request.content_type == 'application/json':
        data = json.loads(request.body or b'{}')
        if not isinstance(data, dict):
            raise ValueError('JSON body must be an object')
        return data
    if request.method == 'POST':
        return request.POST
    # Django only parses form bodies for POST; the app sends profile PUTs as multipart.
    if request.content_type == 'multipart/form-data':
        try:
            data, _files = MultiPartParser(request.META, request,
                                           request.upload_handlers).parse()
        except MultiPartParserError as exc:
            raise ValueError(str(exc)) from exc
        return data
    return QueryDict(request.body)


def storage_errors_as_json(view):
    """Answer database errors raised outside the stores with the storage_failure body."""
    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except DatabaseError as exc:
            logger.error('Database error in %s: %s', view.__name__, exc)
            return error_response(StorageFailure.default_message, 500, StorageFailure.code)
    return wrapper


# ══════════════════════════════════════════════════════════
#   VIEW 1 — login  (meter handlers only)
# ══════════════════════════════════════════════════════════
@csrf_exempt
@require_POST
@storage_errors_as_json
def login(request):
    try:
        form = LoginForm(request_data(request))
    except ValueError:
        return error_response('Malformed request body', 400, 'invalid_input')
    if not form.is_valid():
        return error_response('Username and password are required', 400, 'invalid_input')

    username = form.cleaned_data['username']
    logger.info('Login attempt for %s', username)
    user = authenticate(request, username=username,
                        password=form.cleaned_data['password'])
    if user is None:
        return error_response('Invalid credentials', 401, 'invalid_credentials')

    profile = StaffProfile.objects.filter(user=user).first()
    role = profile.role if profile else None
    if role != StaffProfile.METER_HANDLER:
        logger.info('Login refused for %s: role %r', username, role)
        return error_response('Invalid role for this application', 401, 'invalid_role')

    return JsonResponse({
        'success': True,
        'user': {'id': user.pk, 'username': user.username, 'role': role},
    })


# ══════════════════════════════════════════════════════════
#   VIEW 2 — customer dashboard  (grouped, Done/Pending)
# ══════════════════════════════════════════════════════════
@require_GET
def customer_list(request):
    try:
        grouped = dashboard_service().customer_statuses()
    except StorageFailure:
        return error_response('Failed to fetch customers', 500, StorageFailure.code)
    return JsonResponse(grouped)


# ══════════════════════════════════════════════════════════
#   VIEW 3 — submit a meter reading
# ══════════════════════════════════════════════════════════
@csrf_exempt
@require_POST
@storage_errors_as_json
def reading_create(request):
    try:
        data = request_data(request)
    except ValueError:
        return error_response('Malformed request body', 400, 'invalid_input')

    form = ReadingSubmissionForm(data)
    if not form.is_valid():
        return JsonResponse({'error': 'Invalid reading submission',
                             'code': 'invalid_input',
                             'fields': form.errors.get_json_data()}, status=400)

    try:
        receipt = billing_service().submit_reading(
            meter_number      = form.cleaned_data['meter_number'],
            raw_reading_value = data.get('reading_value'),
            remarks           = form.cleaned_data['remarks'],
            staff_id          = form.staff_pk(),
        )
    except MeterBillingError as exc:
        return billing_error_response(exc)

    return JsonResponse({'success': True, 'reading': receipt.as_dict()})


# ══════════════════════════════════════════════════════════
#   VIEW 4 — reading history for one meter
# ══════════════════════════════════════════════════════════
@require_GET
def reading_list(request, meter_number):
    try:
        readings = billing_service().readings_for_meter(meter_number)
    except StorageFailure:
        return error_response('Failed to fetch readings', 500, StorageFailure.code)
    return JsonResponse([r.as_dict() for r in readings], safe=False)


# ══════════════════════════════════════════════════════════
#   VIEW 5 — staff profile  (view / update)
# ══════════════════════════════════════════════════════════
@csrf_exempt
@require_http_methods(['GET', 'PUT', 'POST'])
@storage_errors_as_json
def profile(request, pk):
    staff = StaffProfile.objects.select_related('user').filter(user_id=pk).first()
    if staff is None:
        return error_response('Profile not found', 404, 'profile_not_found')

    if request.method == 'GET':
        return JsonResponse(staff.as_dict())

    try:
        form = ProfileForm.for_update(request_data(request), staff)
    except ValueError:
        return error_response('Malformed request body', 400, 'invalid_input')
    if not form.is_valid():
        return JsonResponse({'error': 'Invalid profile data',
                             'code': 'invalid_input',
                             'fields': form.errors.get_json_data()}, status=400)

    staff = form.save()
    logger.info('Profile %s updated', pk)
    return JsonResponse(staff.as_dict())
