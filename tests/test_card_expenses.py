from decimal import Decimal

import pytest


@pytest.mark.asyncio
async def test_create_card_expense(client, make_card):
    card = await make_card()

    res = await client.post(
        "/card-expenses",
        json={
            "description": " Mercado ",
            "totalAmount": 123.45,
            "purchaseDate": "2024-03-10",
            "category": "Alimentacao",
            "cardId": card["id"],
        },
    )

    assert res.status_code == 201, res.text
    body = res.json()
    assert body["description"] == "Mercado"
    assert Decimal(str(body["totalAmount"])) == Decimal("123.45")
    assert body["purchaseDate"] == "2024-03-10"
    assert body["category"] == "Alimentacao"
    assert body["cardId"] == card["id"]
    assert body["installments"] is None


@pytest.mark.asyncio
async def test_blank_category_defaults_to_geral(client, make_card):
    card = await make_card()
    res = await client.post(
        "/card-expenses",
        json={"description": "X", "totalAmount": "1.00", "purchaseDate": "2024-03-10", "category": "  ", "cardId": card["id"]},
    )
    assert res.status_code == 201
    assert res.json()["category"] == "GERAL"


@pytest.mark.asyncio
async def test_unknown_card_is_not_found(client):
    res = await client.post(
        "/card-expenses",
        json={"description": "X", "totalAmount": "1.00", "purchaseDate": "2024-03-10", "cardId": 999},
    )
    assert res.status_code == 404
    assert res.json() == {"error": "cardId not found"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing, message",
    [
        ("description", "description is required"),
        ("totalAmount", "totalAmount is required"),
        ("purchaseDate", "purchaseDate is required"),
        ("cardId", "cardId is required"),
    ],
)
async def test_required_fields(client, make_card, missing, message):
    card = await make_card()
    payload = {"description": "X", "totalAmount": "1.00", "purchaseDate": "2024-03-10", "cardId": card["id"]}
    payload.pop(missing)

    res = await client.post("/card-expenses", json=payload)

    assert res.status_code == 400
    assert res.json()["error"] == message


@pytest.mark.asyncio
async def test_delete_card_expense(client, make_card, make_expense):
    card = await make_card()
    expense = await make_expense(card["id"], "50.00", "2024-03-01")

    res = await client.delete("/card-expenses", params={"id": expense["id"]})
    assert res.status_code == 200
    assert res.json() == {"ok": True}

    res = await client.get("/cards", params={"month": 3, "year": 2024})
    assert res.json()[0]["currentBill"]["expenses"] == []


@pytest.mark.asyncio
async def test_delete_requires_id(client):
    res = await client.delete("/card-expenses")
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_delete_unknown_expense(client):
    res = await client.delete("/card-expenses", params={"id": 5})
    assert res.status_code == 404
