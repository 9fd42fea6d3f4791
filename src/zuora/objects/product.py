"""Product catalog objects: products, rate plans, charges, and tiers."""

from __future__ import annotations

from zuora.domain.fields import Field
from zuora.domain.types import FieldType
from zuora.domain.validation import MinChildren, Required
from zuora.objects.associations import RemoteAssociation
from zuora.objects.base import Persistable, ZObject

BILL_CYCLE_TYPES = (
    "DefaultFromCustomer",
    "SpecificDayofMonth",
    "SubscriptionStartDay",
    "ChargeTriggerDay",
)
CHARGE_TYPES = ("OneTime", "Recurring", "Usage")


class Product(ZObject, Persistable):
    allow_feature_changes = Field(FieldType.BOOLEAN)
    category = Field()
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    description = Field()
    effective_end_date = Field(FieldType.DATE)
    effective_start_date = Field(FieldType.DATE)
    name = Field()
    sku = Field(wire_name="SKU")
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    product_rate_plans = RemoteAssociation("ProductRatePlan", foreign_key="ProductId")

    rules = (Required("name", "effective_start_date", "effective_end_date"),)


class ProductRatePlan(ZObject, Persistable):
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    description = Field()
    effective_end_date = Field(FieldType.DATE)
    effective_start_date = Field(FieldType.DATE)
    name = Field()
    product_id = Field(immutable=True)
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    product_rate_plan_charges = RemoteAssociation(
        "ProductRatePlanCharge", foreign_key="ProductRatePlanId"
    )

    rules = (Required("name", "product_id"),)


class ProductRatePlanCharge(ZObject, Persistable):
    """A charge on a catalog rate plan.

    Pricing tiers travel inline as ``ProductRatePlanChargeTierData`` on
    create and update; after a save they are re-read from the server on
    next access.
    """

    accounting_code = Field()
    bill_cycle_day = Field(FieldType.INTEGER)
    bill_cycle_type = Field(FieldType.ENUM, choices=BILL_CYCLE_TYPES)
    billing_period = Field()
    billing_period_alignment = Field()
    charge_model = Field()
    charge_type = Field(FieldType.ENUM, choices=CHARGE_TYPES)
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    default_quantity = Field(FieldType.DECIMAL)
    description = Field()
    included_units = Field(FieldType.DECIMAL)
    max_quantity = Field(FieldType.DECIMAL)
    min_quantity = Field(FieldType.DECIMAL)
    name = Field()
    number_of_period = Field(FieldType.INTEGER)
    overage_calculation_option = Field()
    overage_unused_units_credit_option = Field()
    price_increase_percentage = Field(FieldType.DECIMAL)
    product_rate_plan_id = Field(immutable=True)
    revenue_recognition_rule_name = Field()
    smoothing_model = Field()
    specific_billing_period = Field(FieldType.INTEGER)
    trigger_event = Field()
    uom = Field(wire_name="UOM")
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    product_rate_plan_charge_tiers = RemoteAssociation(
        "ProductRatePlanChargeTier",
        foreign_key="ProductRatePlanChargeId",
        inline=True,
        container="ProductRatePlanChargeTierData",
    )

    rules = (
        Required(
            "name",
            "bill_cycle_type",
            "billing_period",
            "charge_model",
            "charge_type",
            "trigger_event",
            "product_rate_plan_id",
        ),
        MinChildren("product_rate_plan_charge_tiers"),
    )


class ProductRatePlanChargeTier(ZObject, Persistable):
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    currency = Field()
    ending_unit = Field(FieldType.DECIMAL)
    is_overage_price = Field(FieldType.BOOLEAN)
    price = Field(FieldType.DECIMAL)
    price_format = Field()
    product_rate_plan_charge_id = Field(immutable=True)
    starting_unit = Field(FieldType.DECIMAL)
    tier = Field(FieldType.INTEGER)
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    rules = (Required("price"),)
