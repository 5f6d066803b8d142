"""Tests for core schemas: Job, JobLocation, Bid, BidStats, AnnotatedJob."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from job_discovery.core.schemas import (
    AnnotatedJob,
    Bid,
    BidStats,
    Job,
    JobLocation,
    parse_timestamp,
)


class TestJob:
    def test_create_with_required_fields(self) -> None:
        j = Job(id=1)
        assert j.title == ""
        assert j.description == ""
        assert j.status == "open"
        assert j.budget is None
        assert j.location is None
        assert j.category_tags == []
        assert j.is_urgent is False

    def test_id_required(self) -> None:
        with pytest.raises(ValidationError):
            Job.model_validate({"title": "No id"})

    def test_camel_case_aliases(self) -> None:
        j = Job.model_validate({
            "id": 7,
            "categoryTags": ["Roofing"],
            "createdAt": "2024-01-01T00:00:00",
            "startDate": "2024-02-01",
            "isUrgent": True,
        })
        assert j.category_tags == ["Roofing"]
        assert j.created_at == datetime(2024, 1, 1)
        assert j.start_date == datetime(2024, 2, 1)
        assert j.is_urgent is True

    def test_snake_case_names_accepted(self) -> None:
        j = Job(id=1, category_tags=["HVAC"], is_urgent=True)
        assert j.category_tags == ["HVAC"]
        assert j.is_urgent is True

    def test_non_string_text_becomes_empty(self) -> None:
        j = Job.model_validate({"id": 1, "title": 42, "description": None})
        assert j.title == ""
        assert j.description == ""

    def test_junk_tags_dropped(self) -> None:
        j = Job.model_validate({"id": 1, "categoryTags": ["Plumbing", 3, None, "HVAC"]})
        assert j.category_tags == ["Plumbing", "HVAC"]

    def test_non_list_tags_become_empty(self) -> None:
        j = Job.model_validate({"id": 1, "categoryTags": "Plumbing"})
        assert j.category_tags == []

    def test_non_mapping_location_becomes_none(self) -> None:
        j = Job.model_validate({"id": 1, "location": "Halifax, NS"})
        assert j.location is None

    def test_unparseable_date_becomes_none(self) -> None:
        j = Job.model_validate({"id": 1, "createdAt": "last tuesday"})
        assert j.created_at is None

    @pytest.mark.parametrize("status", [None, "archived", 3])
    def test_unknown_status_defaults_to_open(self, status: object) -> None:
        assert Job.model_validate({"id": 1, "status": status}).status == "open"

    def test_known_status_kept(self) -> None:
        assert Job.model_validate({"id": 1, "status": "in_progress"}).status == "in_progress"

    @pytest.mark.parametrize("budget", ["TBD", None, [], {"min": 1}, True])
    def test_non_numeric_budget_becomes_none(self, budget: object) -> None:
        assert Job.model_validate({"id": 1, "budget": budget}).budget is None

    def test_numeric_string_budget_parsed(self) -> None:
        assert Job.model_validate({"id": 1, "budget": "250.5"}).budget == 250.5

    @pytest.mark.parametrize("flag", [None, "yes", 1])
    def test_non_bool_urgent_is_false(self, flag: object) -> None:
        assert Job.model_validate({"id": 1, "isUrgent": flag}).is_urgent is False

    def test_primary_category(self) -> None:
        assert Job(id=1, category_tags=["Painting", "Drywall"]).primary_category == "Painting"

    def test_primary_category_defaults_to_general(self) -> None:
        assert Job(id=1).primary_category == "general"

    def test_frozen_model(self) -> None:
        j = Job(id=1, title="Fix sink")
        with pytest.raises(ValidationError):
            j.title = "New Title"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Job(id=1, title="a") == Job(id=1, title="a")
        assert Job(id=1) != Job(id=2)


class TestJobLocation:
    def test_numeric_strings_parsed(self) -> None:
        loc = JobLocation.model_validate({"latitude": "44.5", "longitude": "-63.5"})
        assert loc.latitude == 44.5
        assert loc.longitude == -63.5

    def test_non_numeric_coordinates_become_none(self) -> None:
        loc = JobLocation.model_validate({"latitude": "north", "longitude": True})
        assert loc.latitude is None
        assert loc.longitude is None

    def test_coordinate_requires_both(self) -> None:
        assert JobLocation(latitude=44.0).coordinate is None
        assert JobLocation(longitude=-63.0).coordinate is None

    def test_coordinate_rejects_non_finite(self) -> None:
        assert JobLocation(latitude=float("nan"), longitude=-63.0).coordinate is None
        assert JobLocation(latitude=44.0, longitude=float("inf")).coordinate is None

    def test_coordinate(self) -> None:
        c = JobLocation(latitude=44.0, longitude=-63.0, city="Halifax").coordinate
        assert c is not None
        assert (c.latitude, c.longitude) == (44.0, -63.0)


class TestParseTimestamp:
    def test_iso_string(self) -> None:
        assert parse_timestamp("2024-02-01") == datetime(2024, 2, 1)

    def test_iso_with_zulu(self) -> None:
        assert parse_timestamp("2024-02-01T10:00:00Z") == datetime(
            2024, 2, 1, 10, tzinfo=timezone.utc,
        )

    def test_epoch_millis(self) -> None:
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_date(self) -> None:
        assert parse_timestamp(date(2024, 5, 6)) == datetime(2024, 5, 6)

    @pytest.mark.parametrize("value", [None, "", "soon", True, float("nan"), object()])
    def test_invalid_values(self, value: object) -> None:
        assert parse_timestamp(value) is None


class TestBid:
    def test_alias(self) -> None:
        b = Bid.model_validate({"id": 1, "jobId": 5, "amount": "250"})
        assert b.job_id == 5
        assert b.amount == 250.0
        assert b.status == "pending"

    def test_amount_required(self) -> None:
        with pytest.raises(ValidationError):
            Bid.model_validate({"id": 1, "jobId": 5})

    @pytest.mark.parametrize("status", [None, "withdrawn"])
    def test_unknown_status_defaults_to_pending(self, status: object) -> None:
        bid = Bid.model_validate({"id": 1, "jobId": 5, "amount": 10, "status": status})
        assert bid.status == "pending"


class TestBidStats:
    def test_default_is_empty(self) -> None:
        s = BidStats()
        assert s.count == 0
        assert s.min_amount is None
        assert s.max_amount is None
        assert s.avg_amount is None

    def test_zero_count_with_amounts_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must be null"):
            BidStats(count=0, min_amount=0.0, max_amount=0.0, avg_amount=0.0)

    def test_positive_count_requires_amounts(self) -> None:
        with pytest.raises(ValidationError, match="required"):
            BidStats(count=2)

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BidStats(count=-1)


class TestAnnotatedJob:
    def test_defaults(self) -> None:
        a = AnnotatedJob(job=Job(id=1))
        assert a.bid_stats == BidStats()
        assert a.distance_km is None

    def test_negative_distance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnnotatedJob(job=Job(id=1), distance_km=-1.0)
