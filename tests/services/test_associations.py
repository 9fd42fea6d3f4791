"""Tests for lazy remote association loading."""

from __future__ import annotations

import pytest

from tests.conftest import NS, FakeZuora, request_xml
from zuora.client import ZuoraClient
from zuora.domain.errors import UnboundObjectError
from zuora.objects import Product, ProductRatePlanCharge, ProductRatePlanChargeTier

CHARGE_ID = "4028e48834aa10a30134aaf7f40b3139"


class TestNewRecord:
    def test_empty_without_remote_call(self, client: ZuoraClient, server: FakeZuora) -> None:
        charge = client.new(ProductRatePlanCharge)
        assert charge.product_rate_plan_charge_tiers == []
        assert server.requests == []

    def test_appended_children_stick(self, client: ZuoraClient) -> None:
        charge = client.new(ProductRatePlanCharge)
        tier = ProductRatePlanChargeTier(price=10)
        charge.product_rate_plan_charge_tiers.append(tier)
        assert charge.product_rate_plan_charge_tiers == [tier]

    def test_unbound_new_record(self) -> None:
        assert ProductRatePlanCharge().product_rate_plan_charge_tiers == []


class TestRemoteLoad:
    def test_loads_by_parent_id(self, client: ZuoraClient, server: FakeZuora) -> None:
        server.reply("query", "product_rate_plan_charge_tier_find_success")
        charge = client.new(ProductRatePlanCharge, id=CHARGE_ID)
        tiers = charge.product_rate_plan_charge_tiers
        assert len(tiers) == 2
        statement = request_xml(client).findtext("env:Body/ins0:query/ins0:queryString", namespaces=NS)
        assert statement.startswith("select ")
        assert statement.endswith(f"from ProductRatePlanChargeTier where ProductRatePlanChargeId = '{CHARGE_ID}'")

    def test_loaded_children_are_persisted_and_bound(self, client: ZuoraClient, server: FakeZuora) -> None:
        server.reply("query", "product_rate_plan_charge_tier_find_success")
        tiers = client.new(ProductRatePlanCharge, id=CHARGE_ID).product_rate_plan_charge_tiers
        assert not any(t.new_record for t in tiers)
        assert all(t.client is client for t in tiers)
        assert [t.price for t in tiers] == [0, 50]

    def test_cached_after_first_load(self, client: ZuoraClient, server: FakeZuora) -> None:
        server.reply("query", "product_rate_plan_charge_tier_find_success")
        charge = client.new(ProductRatePlanCharge, id=CHARGE_ID)
        first = charge.product_rate_plan_charge_tiers
        second = charge.product_rate_plan_charge_tiers
        assert first is second
        assert server.count("query") == 1

    def test_invalidate_forces_reload(self, client: ZuoraClient, server: FakeZuora) -> None:
        server.reply("query", "product_rate_plan_charge_tier_find_success")
        server.reply("query", "query_empty")
        charge = client.new(ProductRatePlanCharge, id=CHARGE_ID)
        assert len(charge.product_rate_plan_charge_tiers) == 2
        client.associations.invalidate(charge)
        assert charge.product_rate_plan_charge_tiers == []
        assert server.count("query") == 2

    def test_string_targets_resolve(self, client: ZuoraClient, server: FakeZuora) -> None:
        server.reply("query", "product_rate_plan_find_success")
        product = client.new(Product, id="4028e4883491c50901349d061be06550")
        plans = product.product_rate_plans
        assert type(plans[0]).__name__ == "ProductRatePlan"
        assert plans[0].product_id == product.id

    def test_unbound_persisted_parent(self) -> None:
        charge = ProductRatePlanCharge(id=CHARGE_ID)
        with pytest.raises(UnboundObjectError):
            charge.product_rate_plan_charge_tiers  # noqa: B018
