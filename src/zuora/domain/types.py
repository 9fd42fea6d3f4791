"""Field types and object states."""

from __future__ import annotations

from enum import StrEnum


class FieldType(StrEnum):
    """Declared type of a mapped object field."""

    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    ENUM = "enum"


class ObjectState(StrEnum):
    """Persistence state of a mapped object instance."""

    NEW = "new"
    PERSISTED = "persisted"
    DESTROYED = "destroyed"


class AmendmentType(StrEnum):
    """Amendment categories accepted by the ``amend`` call."""

    CANCELLATION = "Cancellation"
    NEW_PRODUCT = "NewProduct"
    OWNER_TRANSFER = "OwnerTransfer"
    REMOVE_PRODUCT = "RemoveProduct"
    RENEWAL = "Renewal"
    UPDATE_PRODUCT = "UpdateProduct"
    TERMS_AND_CONDITIONS = "TermsAndConditions"
