from __future__ import annotations

from fastapi import FastAPI, Request

from app.services.config import StorageResourceNames
from app.services.contract_service import ContractService
from app.services.customer_profile_service import CustomerProfileService
from app.services.product_image_service import ProductImageService
from app.services.queue_message_service import QueueMessageService
from app.services.storage_clients import StorageClients


def get_storage_clients_from_app(app: FastAPI) -> StorageClients:
    """Provider for non-request contexts (e.g. app lifespan startup)."""

    clients = getattr(app.state, "storage_clients", None)
    if clients is None:
        raise RuntimeError("Storage clients not initialized (app.state.storage_clients)")
    if not isinstance(clients, StorageClients):
        raise RuntimeError("Unexpected storage_clients type")
    return clients


def get_storage_clients(request: Request) -> StorageClients:
    return get_storage_clients_from_app(request.app)


def get_storage_resources(request: Request) -> StorageResourceNames:
    resources = getattr(request.app.state, "storage_resources", None)
    if resources is None:
        raise RuntimeError("Storage resource names not initialized (app.state.storage_resources)")
    return resources


def get_product_image_service(request: Request) -> ProductImageService:
    """FastAPI dependency provider for the product images container."""

    container_name = get_storage_resources(request).product_images_container
    return ProductImageService(get_storage_clients(request).blob.get_container_client(container_name))


def get_order_queue_service(request: Request) -> QueueMessageService:
    queue_name = get_storage_resources(request).order_queue
    return QueueMessageService(get_storage_clients(request).queue.get_queue_client(queue_name), queue_name=queue_name)


def get_inventory_queue_service(request: Request) -> QueueMessageService:
    queue_name = get_storage_resources(request).inventory_queue
    return QueueMessageService(get_storage_clients(request).queue.get_queue_client(queue_name), queue_name=queue_name)


def get_customer_profile_service(request: Request) -> CustomerProfileService:
    table_name = get_storage_resources(request).customer_table
    return CustomerProfileService(get_storage_clients(request).table.get_table_client(table_name))


def get_contract_service(request: Request) -> ContractService:
    share_name = get_storage_resources(request).contracts_share
    return ContractService(get_storage_clients(request).share.get_share_client(share_name))
