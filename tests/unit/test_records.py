"""Unit tests for shared record types."""

from datetime import datetime, timezone

import pytest

from udyami.shared.records import (
    JobRecord,
    NotificationRecord,
    SellerRecord,
    parse_budget,
    parse_timestamp,
)


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_epoch_milliseconds(self):
        """Large epoch values are treated as milliseconds."""
        result = parse_timestamp(1709283600000)
        assert result == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        result = parse_timestamp(1709283600)
        assert result == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_iso_string_with_z_suffix(self):
        result = parse_timestamp("2024-03-01T09:00:00Z")
        assert result == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        result = parse_timestamp(datetime(2024, 3, 1, 9, 0))
        assert result.tzinfo == timezone.utc

    def test_unparseable_returns_none(self):
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp(None) is None


class TestParseBudget:
    """Tests for parse_budget."""

    def test_range_with_currency_and_separators(self):
        assert parse_budget("₹1,000 - ₹2,500") == (1000.0, 2500.0)

    def test_single_amount(self):
        assert parse_budget("Starting ₹300/hour") == (300.0, None)

    def test_no_numbers(self):
        assert parse_budget("negotiable") == (None, None)


class TestJobRecord:
    """Tests for JobRecord.from_dict."""

    def test_snake_case_fields(self, sample_job_data):
        job = JobRecord.from_dict({**sample_job_data, "id": 7})

        assert job.id == 7
        assert job.skill == "Plumbing"
        assert job.budget_min == 1000.0
        assert job.budget_max == 3000.0
        assert job.buyer_id == 103
        assert job.status == "open"

    def test_legacy_camel_case_fields(self):
        """Persisted jobs with camelCase and a combined budget are normalized."""
        job = JobRecord.from_dict(
            {
                "id": "abc",
                "skill": "Painting",
                "budget": "15000-20000",
                "buyerId": "u1",
                "postedAt": "2024-03-01T09:00:00+00:00",
                "applicants": ["s1", "s2"],
            }
        )

        assert job.budget_min == 15000.0
        assert job.budget_max == 20000.0
        assert job.buyer_id == "u1"
        assert job.posted_at == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert job.applicants == 2

    def test_to_dict_round_trips_through_from_dict(self, sample_job_data):
        job = JobRecord.from_dict({**sample_job_data, "id": 7, "posted_at": 1709283600})
        assert JobRecord.from_dict(job.to_dict()) == job


class TestSellerRecord:
    """Tests for SellerRecord matching."""

    def test_matches_requires_skill_and_location(self, delhi_plumber):
        assert delhi_plumber.matches(JobRecord(id=1, skill="Plumbing", location="Delhi"))
        assert not delhi_plumber.matches(JobRecord(id=1, skill="Plumbing", location="Mumbai"))
        assert not delhi_plumber.matches(JobRecord(id=1, skill="Welding", location="Delhi"))

    def test_from_dict_accepts_phone_number(self):
        seller = SellerRecord.from_dict(
            {"id": 5, "name": "Priya", "skills": ["plumbing"], "phoneNumber": "91987"}
        )
        assert seller.phone == "91987"
        assert seller.skills == frozenset({"plumbing"})


class TestNotificationRecord:
    """Tests for NotificationRecord."""

    def test_invalid_type_raises(self):
        with pytest.raises(ValueError, match="Invalid notification type"):
            NotificationRecord(
                id="n1",
                type="job_posted",
                title="t",
                message="m",
                timestamp=datetime(2024, 3, 1, tzinfo=timezone.utc),
            )

    def test_from_dict_requires_id_and_timestamp(self):
        with pytest.raises(ValueError):
            NotificationRecord.from_dict({"type": "seller_job", "title": "t"})

    def test_stored_form_keeps_job_snapshot(self):
        notification = NotificationRecord(
            id="seller_job_1_104",
            type="seller_job",
            title="New job",
            message="A buyer in Delhi",
            timestamp=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
            job_data=JobRecord(id=1, title="Fix tap", skill="Plumbing", location="Delhi"),
            read=True,
        )

        restored = NotificationRecord.from_dict(notification.to_dict())

        assert restored == notification
        assert restored.job_data.title == "Fix tap"
        assert not restored.is_active
