"""Local input checks run before any request is sent."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from email.utils import parseaddr

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidEmailError, InvalidIPAddressError, InvalidTagsError

# Syntax only: no DNS, and private or single-label domains are fine.
EMAIL_POLICY = {
    "check_deliverability": False,
    "allow_quoted_local": True,
    "globally_deliverable": False,
    "test_environment": True,
}

# Top-level names email-validator refuses even with the policy above.
SPECIAL_USE_DOMAINS = ("localhost", "local", "invalid", "onion", "arpa")

_DOMAIN_LABEL = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")


def check_email(address: str, label: str | None = None) -> str:
    """Validate an email address and return it unchanged.

    Accepts a bare addr-spec or the ``Name <addr>`` form, quoted local parts,
    and intranet or special-use domains such as ``localhost`` or ``corp.local``.
    """
    if not isinstance(address, str) or not address.strip():
        raise _email_error(address, label)

    _, addr_spec = parseaddr(address)
    if not addr_spec or "@" not in addr_spec:
        raise _email_error(address, label)

    try:
        validate_email(addr_spec, **EMAIL_POLICY)
    except EmailNotValidError:
        if not _is_special_use_address(addr_spec):
            raise _email_error(address, label)
    return address


def _is_special_use_address(addr_spec: str) -> bool:
    local, _, domain = addr_spec.rpartition("@")
    labels = domain.lower().split(".")
    if labels[-1] not in SPECIAL_USE_DOMAINS:
        return False
    if not all(_DOMAIN_LABEL.match(part) for part in labels):
        return False

    # The domain is checked above; the local part still goes through the validator.
    try:
        validate_email(f"{local}@example.com", **EMAIL_POLICY)
    except EmailNotValidError:
        return False
    return True


def check_ip(address: str) -> str:
    try:
        ipaddress.ip_address(address)
    except ValueError:
        raise InvalidIPAddressError(value=address)
    return address


def check_tags(tags: Iterable[str] | None) -> None:
    """Reject tag lists holding blank or non-string entries."""
    if tags is None:
        return
    if isinstance(tags, str):
        raise InvalidTagsError("invalid tags format: expected a list of tag names", value=tags)
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidTagsError(value=tag)


def check_tag_list(tags: str) -> None:
    """Reject a comma-separated tag string with empty entries."""
    if not tags:
        return
    if any(not part.strip() for part in tags.split(",")):
        raise InvalidTagsError(value=tags)


def _email_error(address: object, label: str | None) -> InvalidEmailError:
    if label:
        return InvalidEmailError(f"invalid email address: {label}: {address}", value=address)
    return InvalidEmailError(value=address)
