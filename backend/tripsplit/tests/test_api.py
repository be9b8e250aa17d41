"""
Tests for trip, expense and settlement endpoints.
"""
from decimal import Decimal


def create_trip(client, names=("Ann", "Ben", "Cat")):
    response = client.post("/api/trips", json={"name": "Tokyo", "participant_names": list(names)})
    assert response.status_code == 201
    trip = response.json()
    ids = {p["name"]: p["id"] for p in trip["participants"]}
    return trip["id"], ids


def add_expense(client, trip_id, ids, title="Dinner", total="300", payer="Ann",
                splitters=("Ann", "Ben", "Cat"), adjustments=()):
    response = client.post(f"/api/expenses/{trip_id}", json={
        "title": title,
        "total_amount": total,
        "payers": [{"participant_id": ids[payer]}],
        "splitters": [ids[name] for name in splitters],
        "adjustments": [{"participant_id": ids[name], "amount": amount} for name, amount in adjustments],
    })
    return response


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_and_get_trip(client):
    trip_id, ids = create_trip(client)
    
    response = client.get(f"/api/trips/{trip_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Tokyo"
    assert [p["name"] for p in data["participants"]] == ["Ann", "Ben", "Cat"]
    assert data["expenses"] == []
    
    listed = client.get("/api/trips").json()
    assert [t["id"] for t in listed] == [trip_id]


def test_create_trip_requires_participants(client):
    response = client.post("/api/trips", json={"name": "Tokyo", "participant_names": []})
    assert response.status_code == 422


def test_unknown_trip_returns_404(client):
    assert client.get("/api/trips/missing").status_code == 404
    assert client.get("/api/settlement/missing/plan").status_code == 404


def test_add_participant(client):
    trip_id, _ = create_trip(client, names=("Ann",))
    
    response = client.post(f"/api/trips/{trip_id}/participants", json={"name": " Dan "})
    assert response.status_code == 201
    assert response.json()["name"] == "Dan"
    
    names = [p["name"] for p in client.get(f"/api/trips/{trip_id}").json()["participants"]]
    assert names == ["Ann", "Dan"]


def test_new_participant_starts_with_zero_balance(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids)
    client.post(f"/api/trips/{trip_id}/participants", json={"name": "Dan"})
    
    balances = client.get(f"/api/settlement/{trip_id}/balances").json()["balances"]
    dan = [b for b in balances if b["name"] == "Dan"][0]
    assert Decimal(dan["paid"]) == 0
    assert Decimal(dan["consumed"]) == 0
    assert Decimal(dan["net"]) == 0


def test_expense_is_stored_with_lone_payer_filled_in(client):
    trip_id, ids = create_trip(client)
    
    response = add_expense(client, trip_id, ids, adjustments=[("Ben", "30")])
    assert response.status_code == 201
    expense = response.json()
    assert expense["title"] == "Dinner"
    assert [(p["participant_id"], Decimal(p["amount"])) for p in expense["payers"]] == [(ids["Ann"], 300)]
    assert expense["splitters"] == [ids["Ann"], ids["Ben"], ids["Cat"]]
    assert expense["adjustments"][0]["participant_id"] == ids["Ben"]


def test_expense_with_foreign_participant_is_rejected(client):
    trip_id, ids = create_trip(client)
    _, other_ids = create_trip(client, names=("Zed",))
    
    response = add_expense(client, trip_id, {**ids, "Zed": other_ids["Zed"]}, splitters=("Ann", "Zed"))
    assert response.status_code == 400
    assert other_ids["Zed"] in response.json()["detail"]


def test_invalid_expense_is_rejected(client):
    trip_id, ids = create_trip(client)
    
    response = add_expense(client, trip_id, ids, splitters=())
    assert response.status_code == 422


def test_expenses_are_listed_newest_first(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids, title="Lunch")
    add_expense(client, trip_id, ids, title="Dinner")
    
    expenses = client.get(f"/api/trips/{trip_id}").json()["expenses"]
    assert [e["title"] for e in expenses] == ["Dinner", "Lunch"]


def test_balances(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids, adjustments=[("Ben", "30")])
    
    response = client.get(f"/api/settlement/{trip_id}/balances")
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["total_spent"]) == 300
    nets = {b["name"]: Decimal(b["net"]) for b in data["balances"]}
    assert nets == {"Ann": 210, "Ben": -120, "Cat": -90}


def test_settlement_plan(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids)
    
    response = client.get(f"/api/settlement/{trip_id}/plan")
    assert response.status_code == 200
    data = response.json()
    transfers = [(t["from"], t["to"], Decimal(t["amount"])) for t in data["transfers"]]
    assert transfers == [("Ben", "Ann", 100), ("Cat", "Ann", 100)]
    assert data["summary"] == "Tokyo balances:\n\nAnn: +200\nBen: -100\nCat: -100"


def test_uneven_split_is_rounded_for_display(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids, total="100")
    
    data = client.get(f"/api/settlement/{trip_id}/plan").json()
    consumed = {b["name"]: b["consumed"] for b in data["balances"]}
    assert consumed == {"Ann": "33.33", "Ben": "33.33", "Cat": "33.33"}
    assert [t["amount"] for t in data["transfers"]] == ["33.33", "33.33"]


def test_empty_trip_has_empty_plan(client):
    trip_id, _ = create_trip(client)
    
    data = client.get(f"/api/settlement/{trip_id}/plan").json()
    assert data["transfers"] == []
    assert all(Decimal(b["net"]) == 0 for b in data["balances"])


def test_update_expense(client):
    trip_id, ids = create_trip(client)
    expense_id = add_expense(client, trip_id, ids).json()["id"]
    
    response = client.put(f"/api/expenses/{trip_id}/{expense_id}", json={
        "title": "Dinner",
        "total_amount": "90",
        "payers": [{"participant_id": ids["Ben"], "amount": "90"}],
        "splitters": [ids["Ben"], ids["Cat"]],
    })
    assert response.status_code == 200
    assert response.json()["splitters"] == [ids["Ben"], ids["Cat"]]
    
    nets = {
        b["name"]: Decimal(b["net"])
        for b in client.get(f"/api/settlement/{trip_id}/balances").json()["balances"]
    }
    assert nets == {"Ann": 0, "Ben": 45, "Cat": -45}


def test_update_missing_expense_returns_404(client):
    trip_id, ids = create_trip(client)
    
    response = client.put(f"/api/expenses/{trip_id}/missing", json={
        "title": "Dinner",
        "total_amount": "90",
        "payers": [{"participant_id": ids["Ben"]}],
        "splitters": [ids["Ben"]],
    })
    assert response.status_code == 404


def test_delete_expense(client):
    trip_id, ids = create_trip(client)
    expense_id = add_expense(client, trip_id, ids).json()["id"]
    
    assert client.delete(f"/api/expenses/{trip_id}/{expense_id}").status_code == 204
    assert client.delete(f"/api/expenses/{trip_id}/{expense_id}").status_code == 404
    
    data = client.get(f"/api/settlement/{trip_id}/plan").json()
    assert data["transfers"] == []


def test_end_trip(client):
    trip_id, ids = create_trip(client)
    add_expense(client, trip_id, ids)
    
    assert client.delete(f"/api/trips/{trip_id}").status_code == 204
    assert client.get(f"/api/trips/{trip_id}").status_code == 404
    assert client.get("/api/trips").json() == []


def test_sub_cent_amounts_are_rejected(client):
    trip_id, ids = create_trip(client)
    
    response = client.post(f"/api/expenses/{trip_id}", json={
        "title": "Coffee",
        "total_amount": "10.00",
        "payers": [{"participant_id": ids["Ann"], "amount": "10.00"}],
        "splitters": [ids["Ann"], ids["Ben"]],
        "adjustments": [{"participant_id": ids["Ben"], "amount": "0.004"}],
    })
    assert response.status_code == 422
    
    response = client.post(f"/api/expenses/{trip_id}", json={
        "title": "Coffee",
        "total_amount": "10.006",
        "payers": [{"participant_id": ids["Ann"], "amount": "10.006"}],
        "splitters": [ids["Ann"], ids["Ben"]],
    })
    assert response.status_code == 422
    
    assert client.get(f"/api/trips/{trip_id}").json()["expenses"] == []
