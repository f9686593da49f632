"""
Builders that wire clients and engines from Settings.

Engines never read configuration themselves; everything they need is
passed in here.
"""

from __future__ import annotations

import httpx

from reviewflow.clients.backend import PaymentBackendClient
from reviewflow.clients.documents import DocumentServiceClient
from reviewflow.clients.gateway import HttpPaymentGateway
from reviewflow.core.config import Settings
from reviewflow.payments.engine import PaymentWorkflowEngine
from reviewflow.uploads.pipeline import UploadPipeline


def build_payment_engine(http: httpx.AsyncClient, config: Settings) -> PaymentWorkflowEngine:
    gateway = HttpPaymentGateway(
        http,
        base_url=config.GATEWAY_BASE_URL,
        public_key=config.GATEWAY_PUBLIC_KEY,
        timeout=config.NETWORK_TIMEOUT_SECONDS,
    )
    backend = PaymentBackendClient(
        http,
        base_url=config.BACKEND_BASE_URL,
        timeout=config.NETWORK_TIMEOUT_SECONDS,
    )
    return PaymentWorkflowEngine(gateway=gateway, backend=backend)


def build_upload_pipeline(http: httpx.AsyncClient, config: Settings) -> UploadPipeline:
    documents = DocumentServiceClient(
        http,
        storage_base_url=config.BACKEND_BASE_URL,
        ai_base_url=config.AI_SERVICE_BASE_URL,
        ai_api_key=config.AI_SERVICE_API_KEY,
        timeout=config.NETWORK_TIMEOUT_SECONDS,
    )
    return UploadPipeline(
        documents=documents,
        allowed_extensions=config.ALLOWED_DOCUMENT_EXTENSIONS,
        max_bytes=config.MAX_DOCUMENT_BYTES,
        auto_clear_seconds=config.ERROR_AUTO_CLEAR_SECONDS,
    )
