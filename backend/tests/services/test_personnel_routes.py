"""Personnel Routes — CRUD, filtered listings and per-record pension.

Invariants:
    - POST computes pensiun and status_bup server-side and logs PERSONIL_CREATED
    - Duplicate NRP → 400 DUPLICATE_NRP, unknown id → 404
    - PATCH recomputes retirement fields only when ttl or pangkat change
    - DELETE keeps history entries but detaches them from the record
"""

from datetime import date

import pytest

BRIGJEN = {
    "nrp": "11650001",
    "nama": "Budi Santoso",
    "pangkat": "Brigjen TNI",
    "kesatuan": "Kodam Jaya",
    "ttl": "1965-03-10",
}


async def _create(client, **overrides):
    payload = {**BRIGJEN, **overrides}
    res = await client.post("/api/v1/personnel", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


# ─── create ──────────────────────────────────────────────────────

async def test_create_computes_retirement_fields(client, seeded_config):
    body = await _create(client)
    assert body["id"] > 0
    assert body["pensiun"] == "2025-03-10"
    assert body["status_bup"] == "mencapai bup"


async def test_create_non_pati_uses_other_age(client, seeded_config):
    body = await _create(client, nrp="2", pangkat="Kolonel Inf", ttl="1970-06-01")
    assert body["pensiun"] == "2023-06-01"
    assert body["status_bup"] == "Unknown"


async def test_create_without_config_rows_uses_fallbacks(client):
    body = await _create(client)
    # Missing BUP_BRIGJEN row falls back to 58
    assert body["pensiun"] == "2023-03-10"


async def test_create_logs_history_with_user(client, seeded_config):
    res = await client.post(
        "/api/v1/personnel", json=BRIGJEN, headers={"X-User-Id": "7"},
    )
    personnel_id = res.json()["id"]

    history = (await client.get("/api/v1/history")).json()
    assert history[0]["action"] == "PERSONIL_CREATED"
    assert history[0]["user_id"] == 7
    assert history[0]["personnel_id"] == personnel_id
    assert history[0]["personnel"]["nama"] == "Budi Santoso"


async def test_create_duplicate_nrp_rejected(client, seeded_config):
    await _create(client)
    res = await client.post("/api/v1/personnel", json=BRIGJEN)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_NRP"


async def test_create_blank_name_rejected(client):
    res = await client.post("/api/v1/personnel", json={"nrp": "1", "nama": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_negative_salary_rejected(client):
    res = await client.post(
        "/api/v1/personnel", json={"nrp": "1", "nama": "A", "gpt": -1},
    )
    assert res.status_code == 400


# ─── read ────────────────────────────────────────────────────────

async def test_get_includes_age_label_and_live_status(client, seeded_config, make_personnel):
    personnel = await make_personnel(
        pangkat="Brigjen TNI", ttl=date(1965, 3, 10),
        status_bup="belum bup",
    )
    res = await client.get(f"/api/v1/personnel/{personnel.id}")
    assert res.status_code == 200
    body = res.json()
    assert body["usia"].endswith(" Tahun")
    # Stored value is stale; the detail view recomputes it
    assert body["status_bup"] == "mencapai bup"


async def test_get_unknown_id_returns_404(client):
    res = await client.get("/api/v1/personnel/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_list_paginates_and_orders_by_name(client, make_personnel):
    for nama in ("Cahyo", "Agus", "Bambang"):
        await make_personnel(nama=nama)

    res = await client.get("/api/v1/personnel", params={"page": 1, "limit": 2})
    body = res.json()
    assert [p["nama"] for p in body["data"]] == ["Agus", "Bambang"]
    assert body["total"] == 3
    assert body["total_pages"] == 2

    res = await client.get("/api/v1/personnel", params={"page": 2, "limit": 2})
    assert [p["nama"] for p in res.json()["data"]] == ["Cahyo"]


async def test_list_empty_returns_200(client):
    res = await client.get("/api/v1/personnel")
    assert res.status_code == 200
    assert res.json()["data"] == []
    assert res.json()["total"] == 0


async def test_list_filters_are_case_insensitive(client, make_personnel):
    await make_personnel(nama="Agus Salim", kesatuan="Kostrad")
    await make_personnel(nama="Bambang", kesatuan="Kopassus")

    res = await client.get("/api/v1/personnel", params={"nama": "agus"})
    assert [p["nama"] for p in res.json()["data"]] == ["Agus Salim"]

    res = await client.get("/api/v1/personnel", params={"kesatuan": "KOPASSUS"})
    assert [p["nama"] for p in res.json()["data"]] == ["Bambang"]


async def test_list_group_filter(client, make_personnel):
    await make_personnel(nama="A", pangkat="Kapten Inf")
    await make_personnel(nama="B", pangkat="Kolonel")
    await make_personnel(nama="C", pangkat="Serka")

    res = await client.get("/api/v1/personnel", params={"group": "pama"})
    assert [p["nama"] for p in res.json()["data"]] == ["A"]

    res = await client.get("/api/v1/personnel", params={"group": "all"})
    assert res.json()["total"] == 3


async def test_list_invalid_group_returns_400(client):
    res = await client.get("/api/v1/personnel", params={"group": "tamtama"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_CATEGORY"


async def test_officers_by_category(client, make_personnel):
    await make_personnel(nama="A", pangkat="Brigjen TNI")
    await make_personnel(nama="B", pangkat="Mayjen TNI")
    await make_personnel(nama="C", pangkat="Letkol")
    await make_personnel(nama="D", pangkat=None)

    res = await client.get("/api/v1/personnel/officers", params={"category": "pati"})
    body = res.json()
    assert body["category"] == "pati"
    assert [p["nama"] for p in body["data"]] == ["B", "A"]

    res = await client.get("/api/v1/personnel/officers")
    assert res.json()["total"] == 3

    res = await client.get(
        "/api/v1/personnel/officers",
        params={"category": "pati", "pangkat": "mayjen"},
    )
    assert [p["nama"] for p in res.json()["data"]] == ["B"]


async def test_officers_invalid_category(client):
    res = await client.get("/api/v1/personnel/officers", params={"category": "x"})
    assert res.status_code == 400


# ─── update ──────────────────────────────────────────────────────

async def test_patch_rank_recomputes_retirement_date(client, seeded_config):
    created = await _create(client)
    res = await client.patch(
        f"/api/v1/personnel/{created['id']}", json={"pangkat": "Mayjen TNI"},
    )
    assert res.status_code == 200
    assert res.json()["pensiun"] == "2026-03-10"
    assert res.json()["pangkat"] == "Mayjen TNI"


async def test_patch_other_fields_keep_retirement_date(client, seeded_config):
    created = await _create(client)
    res = await client.patch(
        f"/api/v1/personnel/{created['id']}", json={"kesatuan": "Mabes TNI"},
    )
    body = res.json()
    assert body["kesatuan"] == "Mabes TNI"
    assert body["pensiun"] == created["pensiun"]
    assert body["nama"] == created["nama"]


async def test_patch_logs_request_payload(client, seeded_config):
    created = await _create(client)
    await client.patch(
        f"/api/v1/personnel/{created['id']}", json={"kesatuan": "Mabes TNI"},
    )
    history = (await client.get("/api/v1/history")).json()
    assert history[0]["action"] == "PERSONIL_UPDATED"
    assert 'Request: {"kesatuan": "Mabes TNI"}' in history[0]["detail"]


async def test_patch_duplicate_nrp_rejected(client, seeded_config):
    first = await _create(client)
    await _create(client, nrp="99")
    res = await client.patch(
        f"/api/v1/personnel/{first['id']}", json={"nrp": "99"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_NRP"


async def test_patch_same_nrp_allowed(client, seeded_config):
    created = await _create(client)
    res = await client.patch(
        f"/api/v1/personnel/{created['id']}", json={"nrp": BRIGJEN["nrp"]},
    )
    assert res.status_code == 200


async def test_patch_unknown_id_returns_404(client):
    res = await client.patch("/api/v1/personnel/404", json={"nama": "X"})
    assert res.status_code == 404


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_removes_record_and_detaches_history(client, seeded_config):
    created = await _create(client)
    res = await client.delete(f"/api/v1/personnel/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Personnel deleted successfully"}

    assert (await client.get(f"/api/v1/personnel/{created['id']}")).status_code == 404

    history = (await client.get("/api/v1/history")).json()
    assert [h["action"] for h in history] == ["PERSONIL_DELETED", "PERSONIL_CREATED"]
    assert all(h["personnel_id"] is None for h in history)
    assert "Budi Santoso" in history[0]["detail"]


async def test_delete_unknown_id_returns_404(client):
    res = await client.delete("/api/v1/personnel/12345")
    assert res.status_code == 404


# ─── pension ─────────────────────────────────────────────────────

async def test_record_pension_golden_case(client, make_personnel, pension_ready_fields):
    personnel = await make_personnel(**pension_ready_fields)
    res = await client.get(f"/api/v1/personnel/{personnel.id}/pension")
    assert res.status_code == 200
    assert res.json() == {
        "usia": 30,
        "PENSPOK": 1_775_000,
        "TUNJANGAN_ISTRI": 621_250,
        "TUNJANGAN_ANAK": 355_000,
        "TOTAL_PENSIUN": 2_751_250,
    }


@pytest.mark.parametrize("missing", ["gpt", "mdk"])
async def test_record_pension_missing_inputs(
    client, make_personnel, pension_ready_fields, missing,
):
    fields = {**pension_ready_fields, missing: None}
    personnel = await make_personnel(**fields)
    res = await client.get(f"/api/v1/personnel/{personnel.id}/pension")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MISSING_PENSION_INPUT"
    assert error["missing_fields"] == [missing.upper()]


async def test_create_duplicate_nrp_race_returns_400(client, seeded_config, monkeypatch):
    await _create(client)

    async def check_passes(db, nrp, exclude_id=None):
        return None

    monkeypatch.setattr(
        "officer_records.services.personnel_service.ensure_unique_nrp", check_passes,
    )
    res = await client.post("/api/v1/personnel", json=BRIGJEN)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_NRP"
