"""
FastAPI dependencies for the shared store and notifier

Both objects are created once in the application lifespan and kept on
`app.state`; tests replace them through `app.dependency_overrides`.
"""
from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from app.services.checkout_handler import CheckoutHandler
from app.services.contact_handler import ContactHandler
from app.services.notifier import Notifier
from app.services.record_store import RecordStore


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_contact_handler(
    store: RecordStore = Depends(get_record_store),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> ContactHandler:
    return ContactHandler(store, notifier, operator_address=settings.operator_address)


def get_checkout_handler(
    store: RecordStore = Depends(get_record_store),
    notifier: Notifier = Depends(get_notifier),
) -> CheckoutHandler:
    return CheckoutHandler(store, notifier)
