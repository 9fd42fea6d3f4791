"""Mapped billing objects.

Importing this package registers every object type so associations
declared by class name can resolve their targets.
"""

from zuora.objects.account import Account, Subscription
from zuora.objects.amendment import AmendOptions, Amendment, AmendRequest, PreviewOptions, RatePlanData
from zuora.objects.base import ModelBase, Persistable, Submittable, ZObject, lookup, registered
from zuora.objects.product import (
    Product,
    ProductRatePlan,
    ProductRatePlanCharge,
    ProductRatePlanChargeTier,
)
from zuora.objects.rate_plan import RatePlan, RatePlanCharge, RatePlanChargeTier

__all__ = [
    "Account",
    "AmendOptions",
    "AmendRequest",
    "Amendment",
    "ModelBase",
    "Persistable",
    "PreviewOptions",
    "Product",
    "ProductRatePlan",
    "ProductRatePlanCharge",
    "ProductRatePlanChargeTier",
    "RatePlan",
    "RatePlanCharge",
    "RatePlanChargeTier",
    "RatePlanData",
    "Submittable",
    "Subscription",
    "ZObject",
    "lookup",
    "registered",
]
