"""Subscription rate plans, their charges, and charge tiers."""

from __future__ import annotations

from zuora.domain.fields import Field
from zuora.domain.types import FieldType
from zuora.objects.associations import RemoteAssociation
from zuora.objects.base import Persistable, ZObject


class RatePlan(ZObject, Persistable):
    amendment_id = Field(read_only=True)
    amendment_subscription_rate_plan_id = Field()
    amendment_type = Field(read_only=True)
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    name = Field()
    product_rate_plan_id = Field()
    subscription_id = Field(read_only=True)
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    rate_plan_charges = RemoteAssociation("RatePlanCharge", foreign_key="RatePlanId")


class RatePlanCharge(ZObject, Persistable):
    accounting_code = Field()
    apply_discount_to = Field()
    bill_cycle_day = Field(FieldType.INTEGER)
    bill_cycle_type = Field()
    billing_period_alignment = Field()
    charge_model = Field(read_only=True)
    charge_number = Field()
    charge_type = Field(read_only=True)
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    description = Field()
    included_units = Field(FieldType.DECIMAL)
    name = Field()
    number_of_periods = Field(FieldType.INTEGER)
    overage_price = Field(FieldType.DECIMAL)
    price = Field(FieldType.DECIMAL)
    product_rate_plan_charge_id = Field()
    quantity = Field(FieldType.DECIMAL)
    rate_plan_id = Field(immutable=True)
    trigger_date = Field(FieldType.DATE)
    trigger_event = Field()
    uom = Field(wire_name="UOM")
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    rate_plan_charge_tiers = RemoteAssociation("RatePlanChargeTier", foreign_key="RatePlanChargeId")


class RatePlanChargeTier(ZObject, Persistable):
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    ending_unit = Field(FieldType.DECIMAL)
    is_overage_price = Field(FieldType.BOOLEAN)
    price = Field(FieldType.DECIMAL)
    price_format = Field()
    rate_plan_charge_id = Field(immutable=True)
    starting_unit = Field(FieldType.DECIMAL)
    tier = Field(FieldType.INTEGER)
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)
