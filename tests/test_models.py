"""Tests for the record models."""

from __future__ import annotations

from bson import ObjectId

from dashboard.domain.models import AffiliateStat, OverallStat, User


def test_user_defaults_to_admin_role():
    user = User(name="Ada", email="ada@example.com", password="hunter22")
    assert user.role == "admin"
    assert isinstance(user.id, ObjectId)


def test_user_document_uses_camel_case_and_drops_none():
    doc = User(
        name="Ada", email="ada@example.com", password="hunter22", phone_number="555",
    ).to_document()
    assert doc["phoneNumber"] == "555"
    assert "city" not in doc
    assert isinstance(doc["_id"], ObjectId)


def test_overall_stat_accepts_stored_names():
    stat = OverallStat.model_validate({
        "year": 2021,
        "totalCustomers": 12,
        "monthlyData": [{"month": "May", "totalSales": 10, "totalUnits": 2}],
        "salesByCategory": {"shoes": 10},
    })
    assert stat.total_customers == 12
    assert stat.monthly_data[0].total_units == 2
    doc = stat.to_document()
    assert doc["monthlyData"][0]["totalSales"] == 10


def test_affiliate_stat_keeps_object_ids():
    uid, tid = ObjectId(), ObjectId()
    doc = AffiliateStat(user_id=uid, affiliate_sales=[tid]).to_document()
    assert doc["userId"] == uid
    assert doc["affiliateSales"] == [tid]
