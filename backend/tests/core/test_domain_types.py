"""Domain Types — enum values that are persisted or returned to clients."""

from officer_records.core.domain_types import (
    AGE_KEYS, BupStatus, ConfigKey, HistoryAction, RankGroup,
)


def test_bup_status_values_are_stored_strings():
    assert [s.value for s in BupStatus] == [
        "Unknown", "belum bup", "akan bup", "mencapai bup",
    ]


def test_rank_group_values():
    assert {g.value for g in RankGroup} == {"pati", "pamen", "pama", "other"}


def test_age_keys_cover_every_config_key():
    assert set(AGE_KEYS.values()) == set(ConfigKey)
    assert AGE_KEYS["mayjen"] == ConfigKey.BUP_MAYJEN


def test_history_action_is_str():
    assert HistoryAction.CONFIG_UPDATED == "CONFIG_UPDATED"


def test_history_actions_are_the_logged_operations():
    assert {a.value for a in HistoryAction} == {
        "PERSONIL_CREATED", "PERSONIL_UPDATED", "PERSONIL_DELETED",
        "CONFIG_UPDATED", "BUP_REFRESHED",
    }
