"""Customer accounts and subscriptions."""

from __future__ import annotations

from zuora.domain.fields import Field
from zuora.domain.types import FieldType
from zuora.domain.validation import Required
from zuora.objects.associations import RemoteAssociation
from zuora.objects.base import Persistable, ZObject


class Account(ZObject, Persistable):
    account_number = Field()
    allow_invoice_edit = Field(FieldType.BOOLEAN, default=False)
    auto_pay = Field(FieldType.BOOLEAN, default=False)
    balance = Field(FieldType.DECIMAL, read_only=True)
    batch = Field(default="Batch1")
    bill_cycle_day = Field(FieldType.INTEGER, default=1)
    bill_to_id = Field()
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    crm_id = Field()
    currency = Field(default="USD")
    default_payment_method_id = Field()
    invoice_template_id = Field()
    name = Field()
    notes = Field()
    payment_term = Field(default="Due Upon Receipt")
    sold_to_id = Field()
    status = Field(default="Draft")
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    subscriptions = RemoteAssociation("Subscription", foreign_key="AccountId")

    rules = (Required("name", "currency", "bill_cycle_day", "payment_term", "batch", "status"),)


class Subscription(ZObject, Persistable):
    account_id = Field(immutable=True)
    auto_renew = Field(FieldType.BOOLEAN, default=False)
    cancelled_date = Field(FieldType.DATE, read_only=True)
    contract_acceptance_date = Field(FieldType.DATE)
    contract_effective_date = Field(FieldType.DATE)
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    initial_term = Field(FieldType.INTEGER)
    name = Field()
    notes = Field()
    original_id = Field(read_only=True)
    renewal_term = Field(FieldType.INTEGER)
    service_activation_date = Field(FieldType.DATE)
    status = Field(read_only=True)
    subscription_end_date = Field(FieldType.DATE, read_only=True)
    subscription_start_date = Field(FieldType.DATE)
    term_start_date = Field(FieldType.DATE)
    term_type = Field()
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)
    version = Field(FieldType.INTEGER, read_only=True)

    rate_plans = RemoteAssociation("RatePlan", foreign_key="SubscriptionId")

    rules = (Required("account_id", "contract_effective_date"),)
