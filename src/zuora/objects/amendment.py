"""Amendments and the composite ``amend`` request.

``AmendRequest`` is Submittable only: it bundles amendments with amend
and preview options, is sent once through ``amend``, and answers with an
OperationResult. It has no update/destroy/find/query surface.
"""

from __future__ import annotations

from typing import Any
from xml.etree.ElementTree import Element

from zuora.domain.fields import Field
from zuora.domain.types import AmendmentType, FieldType
from zuora.domain.validation import Custom, Inclusion, MinChildren, Required
from zuora.objects.associations import SimpleAssociation
from zuora.objects.base import ModelBase, Persistable, Submittable, ZObject
from zuora.services.result import OperationResult
from zuora.services.translator import translate_amend
from zuora.wire import envelope


class RatePlanData(ModelBase):
    """Option bag: the rate plan an amendment adds plus its charge overrides.

    Accepts a mapping on assignment::

        amendment.rate_plan_data = {"rate_plan": rate_plan, "charges": [charge]}

    Each charge is written as ``RatePlanChargeData`` holding the charge
    and any tiers attached to it.
    """

    rate_plan = SimpleAssociation("RatePlan")
    charges = SimpleAssociation("RatePlanCharge", many=True)

    def write_fields(self, parent: Element, *, mode: str = "nested") -> None:
        if self.rate_plan is not None:
            self.rate_plan.write_fields(envelope.add(parent, "api", "RatePlan"), mode="nested")
        for charge in self.charges:
            data = envelope.add(parent, "api", "RatePlanChargeData")
            charge.write_fields(envelope.add(data, "api", "RatePlanCharge"), mode="nested")
            for tier in charge.attached_children("rate_plan_charge_tiers") or []:
                tier.write_fields(envelope.add(data, "api", "RatePlanChargeTier"), mode="nested")


class Amendment(ZObject, Persistable):
    auto_renew = Field(FieldType.BOOLEAN)
    code = Field(read_only=True)
    contract_effective_date = Field(FieldType.DATE)
    created_by_id = Field(read_only=True)
    created_date = Field(FieldType.DATETIME, read_only=True)
    customer_acceptance_date = Field(FieldType.DATE)
    description = Field()
    effective_date = Field(FieldType.DATE)
    initial_term = Field(FieldType.INTEGER)
    name = Field()
    renewal_term = Field(FieldType.INTEGER)
    service_activation_date = Field(FieldType.DATE)
    status = Field()
    subscription_id = Field()
    term_start_date = Field(FieldType.DATE)
    term_type = Field()
    type = Field(FieldType.ENUM, choices=[t.value for t in AmendmentType])
    updated_by_id = Field(read_only=True)
    updated_date = Field(FieldType.DATETIME, read_only=True)

    rate_plan_data = SimpleAssociation(RatePlanData, namespace="object")

    rules = (
        Required("name", "subscription_id", "type", "contract_effective_date"),
        Inclusion("type", [t.value for t in AmendmentType]),
    )


class AmendOptions(ModelBase):
    apply_credit_balance = Field(FieldType.BOOLEAN, namespace="api")
    generate_invoice = Field(FieldType.BOOLEAN, namespace="api")
    process_payments = Field(FieldType.BOOLEAN, namespace="api")


class PreviewOptions(ModelBase):
    enable_preview_mode = Field(FieldType.BOOLEAN, namespace="api")
    number_of_periods = Field(FieldType.INTEGER, namespace="api")
    preview_through_term_end = Field(FieldType.BOOLEAN, namespace="api")
    preview_type = Field(namespace="api")


def _amendments_valid(request: Any) -> list[tuple[str, str]]:
    problems: list[tuple[str, str]] = []
    for index, amendment in enumerate(request.amendments):
        for name, messages in amendment.validate().items():
            problems.extend((f"amendments[{index}].{name}", msg) for msg in messages)
    return problems


class AmendRequest(ModelBase, Submittable):
    """Composite ``amend`` call."""

    operation = "amend"

    amendments = SimpleAssociation(Amendment, many=True, wire_name="Amendments")
    amend_options = SimpleAssociation(AmendOptions)
    preview_options = SimpleAssociation(PreviewOptions)

    rules = (MinChildren("amendments"), Custom(_amendments_valid))

    def to_body(self) -> Element:
        body = envelope.operation(self.operation)
        self.write_fields(envelope.add(body, "api", "requests"), mode="nested")
        return body

    def translate(self, response: Element) -> OperationResult:
        return translate_amend(response)
