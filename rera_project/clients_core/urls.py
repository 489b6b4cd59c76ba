from django.urls import path

from . import views

urlpatterns = [
    # Access
    path("register", views.register_view, name="register"),
    path("login", views.login_view, name="login"),
    path("user", views.current_user_view, name="current-user"),
    path("health", views.health_view, name="health"),

    # Clients
    path("clients", views.client_list_view, name="client-list"),
    path("clients/<int:client_id>", views.client_detail_view, name="client-detail"),
    path("search/clients", views.client_search_view, name="client-search"),

    # Checklist
    path("documents/<int:client_id>", views.checklist_view, name="checklist"),
    path("documents/<int:client_id>/add", views.checklist_add_view, name="checklist-add"),
    path("reports/pending-documents", views.pending_documents_view, name="pending-documents"),
    path("reports/pending-documents/<int:client_id>", views.pending_documents_view,
         name="pending-documents-client"),

    # Payments
    path("payments", views.payment_list_view, name="payment-list"),
    path("payments/<int:pk>", views.payment_item_view, name="payment-item"),
    path("payments/<int:payment_id>/record", views.payment_record_view, name="payment-record"),

    # Tasks
    path("tasks", views.task_create_view, name="task-create"),
    path("tasks/<int:pk>", views.task_item_view, name="task-item"),
]
