from decimal import Decimal

import pytest


async def _create(client, **overrides):
    payload = {"description": "Salario", "amount": "5000.00", "type": "INCOME", "date": "2024-03-05"}
    payload.update(overrides)
    return await client.post("/transactions", json=payload)


@pytest.mark.asyncio
async def test_create_transaction(client):
    res = await _create(client, category="  Trabalho ")

    assert res.status_code == 201, res.text
    body = res.json()
    assert body["description"] == "Salario"
    assert Decimal(str(body["amount"])) == Decimal("5000.00")
    assert body["type"] == "INCOME"
    assert body["category"] == "Trabalho"
    assert body["date"] == "2024-03-05"
    assert body["relatedCardId"] is None
    assert body["isRecurring"] is False
    assert body["installments"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("category", [None, "", "   "])
async def test_blank_category_defaults_to_geral(client, category):
    res = await _create(client, category=category)
    assert res.status_code == 201, res.text
    assert res.json()["category"] == "GERAL"


@pytest.mark.asyncio
async def test_empty_description_is_rejected(client):
    res = await _create(client, description="", amount=10, type="EXPENSE", date="2024-01-01")
    assert res.status_code == 400
    assert "description" in res.json()["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"amount": None}, "amount"),
        ({"amount": "-1"}, "amount"),
        ({"amount": "abc"}, "amount"),
        ({"type": "TRANSFER"}, "type"),
        ({"date": None}, "date"),
    ],
)
async def test_invalid_fields_are_rejected(client, overrides, field):
    res = await _create(client, **overrides)
    assert res.status_code == 400, res.text
    assert field in res.json()["error"]


@pytest.mark.asyncio
async def test_malformed_date_is_a_client_error(client):
    res = await _create(client, date="05/03/2024")
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Invalid date"
    assert "YYYY-MM-DD" in body["detail"]


@pytest.mark.asyncio
async def test_unknown_related_card_is_not_found(client):
    res = await _create(client, relatedCardId=999)
    assert res.status_code == 404
    assert res.json()["error"] == "relatedCardId not found"


@pytest.mark.asyncio
async def test_list_orders_by_date_desc_and_filters_by_month(client):
    await _create(client, description="Fev", date="2024-02-29")
    await _create(client, description="Mar 1", date="2024-03-01")
    await _create(client, description="Mar 31", date="2024-03-31")
    await _create(client, description="Abr", date="2024-04-01")

    res = await client.get("/transactions")
    assert res.status_code == 200
    assert [t["description"] for t in res.json()] == ["Abr", "Mar 31", "Mar 1", "Fev"]

    res = await client.get("/transactions", params={"month": 3, "year": 2024})
    assert [t["description"] for t in res.json()] == ["Mar 31", "Mar 1"]


@pytest.mark.asyncio
async def test_unparseable_period_returns_everything(client):
    await _create(client, date="2024-02-01")
    await _create(client, date="2024-03-01")

    res = await client.get("/transactions", params={"month": "abc", "year": 2024})
    assert res.status_code == 200
    assert len(res.json()) == 2


@pytest.mark.asyncio
async def test_out_of_range_month_is_rejected(client):
    res = await client.get("/transactions", params={"month": 13, "year": 2024})
    assert res.status_code == 400
    assert "month" in res.json()["error"]


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client):
    created = (await _create(client)).json()

    res = await client.put(
        "/transactions",
        json={"id": created["id"], "payload": {"amount": "4500.50", "category": " "}},
    )

    assert res.status_code == 200, res.text
    body = res.json()
    assert Decimal(str(body["amount"])) == Decimal("4500.50")
    assert body["category"] == "GERAL"
    assert body["description"] == "Salario"
    assert body["date"] == "2024-03-05"
    assert body["type"] == "INCOME"


@pytest.mark.asyncio
async def test_update_date_and_link_card(client, make_card):
    card = await make_card()
    created = (await _create(client, type="EXPENSE", description="Fatura")).json()

    res = await client.put(
        "/transactions",
        json={"id": created["id"], "payload": {"date": "2024-04-10", "relatedCardId": card["id"]}},
    )

    assert res.status_code == 200, res.text
    assert res.json()["date"] == "2024-04-10"
    assert res.json()["relatedCardId"] == card["id"]


@pytest.mark.asyncio
async def test_update_requires_id(client):
    res = await client.put("/transactions", json={"payload": {"amount": "1"}})
    assert res.status_code == 400
    assert res.json()["error"] == "Missing id"


@pytest.mark.asyncio
async def test_update_unknown_id(client):
    res = await client.put("/transactions", json={"id": 12345, "payload": {"amount": "1"}})
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_update_rejects_blank_description(client):
    created = (await _create(client)).json()
    res = await client.put("/transactions", json={"id": created["id"], "payload": {"description": "  "}})
    assert res.status_code == 400
    assert "description" in res.json()["error"]


@pytest.mark.asyncio
async def test_delete_transaction(client):
    created = (await _create(client)).json()

    res = await client.delete("/transactions", params={"id": created["id"]})
    assert res.status_code == 200
    assert res.json() == {"ok": True}

    res = await client.get("/transactions")
    assert res.json() == []


@pytest.mark.asyncio
async def test_delete_requires_id(client):
    res = await client.delete("/transactions")
    assert res.status_code == 400
    assert res.json()["error"] == "Missing id"


@pytest.mark.asyncio
async def test_delete_unknown_id(client):
    res = await client.delete("/transactions", params={"id": 77})
    assert res.status_code == 404
