from alumni.services.storage_service import StorageService, storage_service, get_storage_service
from alumni.services.payment_service import PaystackGateway, get_payment_gateway
from alumni.services.email_service import EmailService, get_email_service

__all__ = [
    "StorageService",
    "storage_service",
    "get_storage_service",
    "PaystackGateway",
    "get_payment_gateway",
    "EmailService",
    "get_email_service",
]
