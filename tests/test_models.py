"""Tests for data models."""

import pytest
from covconfig import UNSET
from covconfig import MergePolicy


class TestMergePolicy:
    """Test MergePolicy eligibility."""

    def test_defaults(self):
        policy = MergePolicy()
        assert policy.enabled is True
        assert policy.timeout_seconds == 600

    def test_recent_result_is_eligible(self):
        policy = MergePolicy(timeout_seconds=600)
        assert policy.is_eligible(created_at=1_000, now=1_599)

    def test_result_at_timeout_is_stale(self):
        """Test a result set exactly timeout_seconds old is not eligible."""
        policy = MergePolicy(timeout_seconds=600)
        assert not policy.is_eligible(created_at=1_000, now=1_600)

    def test_disabled_policy_rejects_everything(self):
        policy = MergePolicy(enabled=False)
        assert not policy.is_eligible(created_at=1_000, now=1_001)

    def test_now_defaults_to_current_time(self, monkeypatch):
        monkeypatch.setattr("covconfig.models.time.time", lambda: 5_000.0)
        assert MergePolicy(timeout_seconds=10).is_eligible(created_at=4_995)

    def test_policy_is_frozen(self):
        with pytest.raises(AttributeError):
            MergePolicy().enabled = False  # type: ignore[misc]


class TestUnset:
    """Test the UNSET marker."""

    def test_is_falsy_singleton(self):
        assert not UNSET
        assert type(UNSET)() is UNSET
        assert repr(UNSET) == "UNSET"
