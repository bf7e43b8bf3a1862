"""Validation of raw ``/users`` JSON into ``UserRecord`` values.

The remote payload is loosely typed; every record is checked here so that
malformed data is rejected at the fetch boundary instead of being rendered
with missing cells.
"""

from __future__ import annotations
from typing import Any, List, Mapping

from domain.models import Address, Company, UserRecord
from parsing.errors import (
    DuplicateIdError,
    FieldTypeError,
    MissingFieldError,
    PayloadShapeError,
)

_TEXT_FIELDS = ("name", "username", "email", "phone", "website")


def _require_mapping(obj: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise PayloadShapeError(
            f"{where} must be an object, got {type(obj).__name__}", context={"where": where}
        )
    return obj


def _require_text(obj: Mapping[str, Any], key: str, where: str) -> str:
    if key not in obj:
        raise MissingFieldError(f"{where} is missing '{key}'", context={"where": where, "field": key})
    value = obj[key]
    if not isinstance(value, str):
        raise FieldTypeError(
            f"{where}.{key} must be a string, got {type(value).__name__}",
            context={"where": where, "field": key},
        )
    return value


def _require_id(obj: Mapping[str, Any], where: str) -> int:
    if "id" not in obj:
        raise MissingFieldError(f"{where} is missing 'id'", context={"where": where, "field": "id"})
    value = obj["id"]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldTypeError(
            f"{where}.id must be an integer, got {type(value).__name__}",
            context={"where": where, "field": "id"},
        )
    return value


def parse_user(obj: Any, *, where: str = "user") -> UserRecord:
    record = _require_mapping(obj, where)
    user_id = _require_id(record, where)
    texts = {key: _require_text(record, key, where) for key in _TEXT_FIELDS}
    if "address" not in record:
        raise MissingFieldError(f"{where} is missing 'address'", context={"where": where, "field": "address"})
    address = _require_mapping(record["address"], f"{where}.address")
    if "company" not in record:
        raise MissingFieldError(f"{where} is missing 'company'", context={"where": where, "field": "company"})
    company = _require_mapping(record["company"], f"{where}.company")
    return UserRecord(
        id=user_id,
        address=Address(
            city=_require_text(address, "city", f"{where}.address"),
            zipcode=_require_text(address, "zipcode", f"{where}.address"),
        ),
        company=Company(name=_require_text(company, "name", f"{where}.company")),
        **texts,
    )


def parse_users(payload: Any) -> List[UserRecord]:
    """Parse the full collection, preserving arrival order.

    Raises a ``ParsingError`` subclass on the first invalid record.
    """
    if not isinstance(payload, list):
        raise PayloadShapeError(
            f"users payload must be a list, got {type(payload).__name__}",
            context={"where": "payload"},
        )
    users: List[UserRecord] = []
    seen: set[int] = set()
    for idx, item in enumerate(payload):
        user = parse_user(item, where=f"users[{idx}]")
        if user.id in seen:
            raise DuplicateIdError(f"duplicate user id {user.id}", context={"id": user.id, "index": idx})
        seen.add(user.id)
        users.append(user)
    return users
