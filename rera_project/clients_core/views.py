import functools
import json
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt

from .auth import authenticate_owner, create_access_token, register_owner
from .exceptions import (Conflict, InvalidInput, NotFound, StorageError,
                         TrackerError)
from .services import ChecklistManager, ClientRegistry, PaymentLedger, TaskBoard

logger = logging.getLogger(__name__)

# Service instances wired to the ORM-backed stores
checklists = ChecklistManager()
ledger = PaymentLedger()
tasks = TaskBoard()
registry = ClientRegistry(checklists=checklists, ledger=ledger, tasks=tasks)

PAYMENT_FIELDS = {"clientId", "amount", "description", "dueDate"}
RECORD_FIELDS = {"amount", "date", "notes"}

ERROR_STATUS = [
    (NotFound, 404),
    (Conflict, 409),
    (InvalidInput, 400),  # InvalidAmount included
    (StorageError, 500),
]


def _status_for(exc):
    for kind, status in ERROR_STATUS:
        if isinstance(exc, kind):
            return status
    return 500


def _body(request):
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except ValueError:
        raise InvalidInput("Request body must be JSON")
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be a JSON object")
    return payload


def _only(payload, allowed):
    unknown = sorted(set(payload) - allowed)
    if unknown:
        raise InvalidInput(f"Unknown field(s): {', '.join(unknown)}")
    return payload


def api_view(methods, auth=True):
    """
    JSON endpoint wrapper: method check, bearer check and
    mapping of core errors to status codes.
    """
    def decorator(view):
        @csrf_exempt
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in methods:
                return JsonResponse({"error": "Method not allowed"}, status=405)
            if auth and getattr(request, "owner", None) is None:
                return JsonResponse({"error": "Unauthorized"}, status=401)
            try:
                return view(request, *args, **kwargs)
            except TrackerError as exc:
                status = _status_for(exc)
                if status >= 500:
                    logger.error("Storage failure in %s: %s", view.__name__, exc, exc_info=True)
                    return JsonResponse({"error": "Something went wrong!"}, status=status)
                return JsonResponse({"error": str(exc)}, status=status)
        return wrapper
    return decorator


# ---------- Access ----------
@api_view(["POST"], auth=False)
def register_view(request):
    payload = _body(request)
    register_owner(payload.get("userId"), payload.get("password"))
    return JsonResponse({"message": "User registered successfully"}, status=201)


@api_view(["POST"], auth=False)
def login_view(request):
    payload = _body(request)
    user = authenticate_owner(payload.get("userId"), payload.get("password"))
    return JsonResponse({"token": create_access_token(user)})


@api_view(["GET"])
def current_user_view(request):
    return JsonResponse({"userId": request.owner.get_username(), "id": request.owner.pk})


@api_view(["GET"], auth=False)
def health_view(request):
    return JsonResponse({"status": "OK", "timestamp": timezone.now().isoformat()})


# ---------- Clients ----------
@api_view(["GET", "POST"])
def client_list_view(request):
    owner_id = request.owner.pk
    if request.method == "POST":
        client = registry.create(owner_id, _body(request))
        return JsonResponse(client.to_dict(), status=201)
    return JsonResponse([c.to_dict() for c in registry.list(owner_id)], safe=False)


@api_view(["GET", "PUT", "DELETE"])
def client_detail_view(request, client_id):
    owner_id = request.owner.pk
    if request.method == "PUT":
        client = registry.update(client_id, owner_id, _body(request))
        return JsonResponse(client.to_dict())
    if request.method == "DELETE":
        registry.delete(client_id, owner_id)
        return JsonResponse({"message": "Client deleted successfully"})
    return JsonResponse(registry.get(client_id, owner_id).to_dict())


@api_view(["GET"])
def client_search_view(request):
    clients = registry.search(request.owner.pk, request.GET.get("q", ""))
    return JsonResponse([c.to_dict() for c in clients], safe=False)


# ---------- Checklist ----------
@api_view(["GET", "PUT"])
def checklist_view(request, client_id):
    owner_id = request.owner.pk
    if request.method == "PUT":
        payload = _only(_body(request), {"documentName", "status"})
        checklist = checklists.set_status(
            client_id, owner_id, payload.get("documentName"), payload.get("status"))
        return JsonResponse(checklist.to_dict())
    return JsonResponse(checklists.get(client_id, owner_id).to_dict())


@api_view(["POST"])
def checklist_add_view(request, client_id):
    payload = _only(_body(request), {"documentName"})
    checklist = checklists.add_label(
        client_id, request.owner.pk, payload.get("documentName"))
    return JsonResponse(checklist.to_dict())


@api_view(["GET"])
def pending_documents_view(request, client_id=None):
    report = checklists.pending_report(request.owner.pk, client_id=client_id)
    return JsonResponse(report, safe=False)


# ---------- Payments ----------
@api_view(["GET", "POST"])
def payment_list_view(request):
    owner_id = request.owner.pk
    if request.method == "POST":
        payload = _only(_body(request), PAYMENT_FIELDS)
        payment = ledger.create(
            payload.get("clientId"),
            owner_id,
            payload.get("amount"),
            description=payload.get("description", ""),
            due_date=payload.get("dueDate"),
        )
        return JsonResponse(payment.to_dict(), status=201)
    return JsonResponse([p.to_dict() for p in ledger.list_for_owner(owner_id)], safe=False)


@api_view(["GET", "DELETE"])
def payment_item_view(request, pk):
    # GET lists a client's payments, DELETE removes one payment
    owner_id = request.owner.pk
    if request.method == "DELETE":
        ledger.delete(pk, owner_id)
        return JsonResponse({"message": "Payment deleted successfully"})
    return JsonResponse([p.to_dict() for p in ledger.list_for_client(pk, owner_id)], safe=False)


@api_view(["PUT"])
def payment_record_view(request, payment_id):
    payload = _only(_body(request), RECORD_FIELDS)
    payment = ledger.record_payment(
        payment_id,
        request.owner.pk,
        payload.get("amount"),
        date=payload.get("date"),
        notes=payload.get("notes", ""),
    )
    return JsonResponse(payment.to_dict())


# ---------- Tasks ----------
@api_view(["POST"])
def task_create_view(request):
    payload = _body(request)
    client_id = payload.pop("clientId", None)
    task = tasks.create(client_id, request.owner.pk, payload)
    return JsonResponse(task.to_dict(), status=201)


@api_view(["GET", "PUT", "DELETE"])
def task_item_view(request, pk):
    # GET lists a client's tasks, PUT / DELETE act on one task
    owner_id = request.owner.pk
    if request.method == "PUT":
        task = tasks.update(pk, owner_id, _body(request))
        return JsonResponse(task.to_dict())
    if request.method == "DELETE":
        tasks.delete(pk, owner_id)
        return JsonResponse({"message": "Task deleted successfully"})
    return JsonResponse([t.to_dict() for t in tasks.list_for_client(pk, owner_id)], safe=False)
