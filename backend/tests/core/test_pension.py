"""Pension Rules — tier table, base pension, allowances and required inputs.

Tests:
    - PENSION_TIERS is contiguous and ascending
    - apply_pension_tier bracket edges and pass-through above the table
    - Golden pension case and the child allowance cap
    - Missing inputs raise MissingPensionInputError naming every field
"""

from datetime import date
from types import SimpleNamespace

import pytest

from officer_records.core.errors import MissingPensionInputError
from officer_records.core.pension import (
    PENSION_TIERS, PensionInput, apply_pension_tier, compute_base_pension,
    compute_pension, count_active_children, missing_pension_fields,
)


def _input(**overrides) -> PensionInput:
    values = dict(
        gpt=1_000_000, mdk=28,
        tmt_tni=date(1990, 1, 1), pensiun=date(2020, 1, 1),
        has_partner=True, child_statuses=("AKTIF", "AKTIF"),
    )
    values.update(overrides)
    return PensionInput(**values)


# ─── tiers ───────────────────────────────────────────────────────

def test_tier_table_is_contiguous():
    assert len(PENSION_TIERS) == 25
    assert PENSION_TIERS[0].min == 0
    for prev, tier in zip(PENSION_TIERS, PENSION_TIERS[1:]):
        assert tier.min == prev.max + 1
        assert tier.ceiling == tier.max


@pytest.mark.parametrize("amount, expected", [
    (0, 1_775_000),
    (750_000, 1_775_000),
    (1_775_000, 1_775_000),
    (1_775_001, 1_901_300),
    (3_000_000, 3_037_200),
    (4_804_200, 4_804_200),
    (4_804_201, 4_804_201),
    (9_000_000, 9_000_000),
])
def test_apply_pension_tier(amount, expected):
    assert apply_pension_tier(amount) == expected


# ─── base pension ────────────────────────────────────────────────

def test_base_pension_full_service():
    assert compute_base_pension(30, 1_000_000, 10) == 750_000


def test_base_pension_partial_service_floors():
    # 27 * 3_333_333 / 40 = 2_249_999.775
    assert compute_base_pension(29, 3_333_333, 27) == 2_249_999


# ─── children ────────────────────────────────────────────────────

@pytest.mark.parametrize("statuses, expected", [
    ((), 0),
    (("AKTIF",), 1),
    (("AKTIF", "AKTIF", "AKTIF", "AKTIF"), 2),
    (("aktif", "AKTIF ", None, "TIDAK"), 0),
    ((None, None, None, None, "AKTIF"), 0),
])
def test_count_active_children(statuses, expected):
    assert count_active_children(statuses) == expected


# ─── compute_pension ─────────────────────────────────────────────

def test_golden_case():
    result = compute_pension(_input())
    assert result.to_dict() == {
        "usia": 30,
        "PENSPOK": 1_775_000,
        "TUNJANGAN_ISTRI": 621_250,
        "TUNJANGAN_ANAK": 355_000,
        "TOTAL_PENSIUN": 2_751_250,
    }


def test_no_partner_no_children():
    result = compute_pension(_input(has_partner=False, child_statuses=()))
    assert result.tunjangan_istri == 0
    assert result.tunjangan_anak == 0
    assert result.total_pensiun == result.penspok


def test_child_allowance_capped_at_two():
    two = compute_pension(_input(child_statuses=("AKTIF", "AKTIF")))
    four = compute_pension(_input(child_statuses=("AKTIF",) * 4))
    assert four.tunjangan_anak == two.tunjangan_anak


def test_usia_is_calendar_year_difference():
    result = compute_pension(_input(tmt_tni=date(1990, 12, 31), pensiun=date(2019, 1, 1)))
    assert result.usia == 29


def test_total_is_sum_of_parts():
    result = compute_pension(_input(gpt=5_000_000, mdk=33, pensiun=date(2024, 6, 1)))
    assert result.total_pensiun == (
        result.penspok + result.tunjangan_istri + result.tunjangan_anak
    )


def test_missing_inputs_are_all_reported():
    with pytest.raises(MissingPensionInputError) as exc_info:
        compute_pension(PensionInput(gpt=None, mdk=0, tmt_tni=None, pensiun=None))
    assert exc_info.value.missing_fields == ["GPT", "MDK", "TMT_TNI", "PENSIUN"]
    assert exc_info.value.http_status == 400


def test_missing_pension_fields_empty_when_complete():
    assert missing_pension_fields(_input()) == []


# ─── adapters ────────────────────────────────────────────────────

def test_from_mapping_reads_uppercase_keys():
    data = PensionInput.from_mapping({
        "GPT": "1000000", "MDK": 28,
        "TMT_TNI": "1990-01-01", "PENSIUN": "2020-01-01",
        "PASANGAN": "Siti", "STS_ANAK_1": "AKTIF", "STS_ANAK_3": "AKTIF",
    })
    assert data.gpt == 1_000_000
    assert data.has_partner is True
    assert data.child_statuses == ("AKTIF", None, "AKTIF", None)
    assert compute_pension(data).total_pensiun == 2_751_250


def test_from_mapping_empty_partner_is_absent():
    assert PensionInput.from_mapping({"PASANGAN": ""}).has_partner is False
    assert PensionInput.from_mapping({}).has_partner is False


def test_from_mapping_whitespace_partner_is_present():
    data = PensionInput.from_mapping({"PASANGAN": "   "})
    assert data.has_partner is True


def test_from_record_reads_attributes():
    record = SimpleNamespace(
        gpt=1_000_000, mdk=28, tmt_tni=date(1990, 1, 1), pensiun=date(2020, 1, 1),
        pasangan=None, sts_anak_1="AKTIF", sts_anak_2=None,
        sts_anak_3=None, sts_anak_4=None,
    )
    data = PensionInput.from_record(record)
    assert data.has_partner is False
    assert count_active_children(data.child_statuses) == 1
