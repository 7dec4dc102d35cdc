"""Tests for the detailing service catalog."""

import pytest

from detailing.tools.services import (
    DEFAULT_CATALOG,
    add_service,
    get_all_services,
    get_service,
    match_service,
)
from tests.conftest import make_timing


class TestCatalog:
    def test_dashboard_services_present(self):
        names = [s.name for s in get_all_services("det-1")]
        for name in ["Full Detail", "Exterior Wash", "Interior Clean"]:
            assert name in names

    def test_lookup_is_case_insensitive(self):
        service = get_service("det-1", "  full DETAIL ")
        assert service is not None
        assert service.price == 199.99

    def test_unknown_service(self):
        assert get_service("det-1", "Engine Rebuild") is None

    def test_duration_fallback(self):
        service = get_service("det-1", "Paint Correction")
        assert service.duration_minutes is None
        assert service.effective_duration(make_timing(default_duration=240)) == 240

    def test_catalog_entries_are_valid(self):
        assert len(get_all_services("det-1")) == len(DEFAULT_CATALOG)


class TestAddService:
    def test_add_custom_service(self):
        service = add_service("det-1", "Engine Bay Clean", 79.0, 45)
        assert service.duration_minutes == 45
        assert get_service("det-1", "engine bay clean") == service

    def test_custom_service_scoped_to_detailer(self):
        add_service("det-1", "Engine Bay Clean", 79.0)
        assert get_service("det-2", "Engine Bay Clean") is None

    def test_duplicate_name_rejected(self):
        add_service("det-1", "Engine Bay Clean", 79.0)
        with pytest.raises(ValueError, match="already exists"):
            add_service("det-1", "engine bay clean", 89.0)

    def test_duplicate_of_catalog_rejected(self):
        with pytest.raises(ValueError, match="already exists"):
            add_service("det-1", "Full Detail", 10.0)


class TestMatchService:
    @pytest.mark.parametrize("query,expected", [
        ("Full Detail", "Full Detail"),
        ("just a quick wash", "Exterior Wash"),
        ("vacuum the seats", "Interior Clean"),
        ("ceramic", "Ceramic Coating"),
        ("remove swirl marks", "Paint Correction"),
    ])
    def test_matches(self, query, expected):
        assert match_service(query) == expected

    def test_no_match(self):
        assert match_service("oil change") is None
