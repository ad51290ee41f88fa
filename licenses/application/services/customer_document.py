"""
Customer document serialization.

Converts customer records to and from the persisted document layout:

    {"customers": [{"id", "name", "email", "licenseKey", "status", "banned",
                    "maxDevices", "createdAt", "expiresAt",
                    "activations": [{"deviceId", "activatedAt", "lastSeen"}]}]}

Timestamps use the sortable UTC text form of licenses.domain.expiry.
"""
import logging
from typing import Any, Dict, Iterable, List

from activations.domain.activation import Activation
from activations.domain.registry import ActivationRegistry
from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseStatus
from licenses.domain.customer import Customer
from licenses.domain.expiry import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


def customer_to_dict(customer: Customer) -> Dict[str, Any]:
    """
    Serialize a customer record.

    Args:
        customer: Customer record

    Returns:
        JSON-compatible dictionary
    """
    return {
        "id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "licenseKey": customer.license_key,
        "status": customer.status.value,
        "banned": customer.banned,
        "maxDevices": customer.max_devices,
        "createdAt": format_timestamp(customer.created_at),
        "expiresAt": format_timestamp(customer.expires_at),
        "activations": [
            {
                "deviceId": activation.device_id,
                "activatedAt": format_timestamp(activation.activated_at),
                "lastSeen": format_timestamp(activation.last_seen),
            }
            for activation in customer.activations
        ],
    }


def customer_from_dict(data: Dict[str, Any]) -> Customer:
    """
    Deserialize a customer record.

    A record without a banned field takes it from status, which is how
    documents that predate the explicit flag mark bans. A banned record is
    always stored with the banned status.

    Args:
        data: Dictionary in the document layout

    Returns:
        Customer record

    Raises:
        ValidationError: If a field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Customer record must be an object")
    try:
        status = LicenseStatus(data["status"])
        banned = data.get("banned")
        if banned is None:
            banned = status is LicenseStatus.BANNED
        elif banned:
            status = LicenseStatus.BANNED
        activations = ActivationRegistry.of(
            Activation(
                device_id=item["deviceId"],
                activated_at=parse_timestamp(item["activatedAt"]),
                last_seen=parse_timestamp(item["lastSeen"]),
            )
            for item in data.get("activations") or []
        )
        return Customer(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            license_key=data["licenseKey"],
            status=status,
            banned=bool(banned),
            max_devices=int(data["maxDevices"]),
            created_at=parse_timestamp(data["createdAt"]),
            expires_at=parse_timestamp(data["expiresAt"]),
            activations=activations,
        )
    except KeyError as exc:
        raise ValidationError(f"Customer record is missing field {exc.args[0]}") from exc
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Malformed customer record {data.get('id')!r}: {exc}") from exc


def dump_document(customers: Iterable[Customer]) -> Dict[str, Any]:
    """
    Serialize a collection of customers into a document.

    Args:
        customers: Customer records

    Returns:
        Document dictionary
    """
    return {"customers": [customer_to_dict(customer) for customer in customers]}


def load_document(document: Dict[str, Any]) -> List[Customer]:
    """
    Deserialize a document into customer records.

    Args:
        document: Document dictionary

    Returns:
        List of Customer records in document order

    Raises:
        ValidationError: If the document or a record is malformed
    """
    if not isinstance(document, dict) or not isinstance(document.get("customers"), list):
        raise ValidationError("Document must be an object with a customers list")
    customers = [customer_from_dict(item) for item in document["customers"]]
    logger.debug("Loaded %d customer record(s)", len(customers))
    return customers
