"""Tests for the application service facade."""

import json
from dataclasses import replace
from unittest.mock import Mock, patch

import pytest

from loadboard_app.config.defaults import NotificationParams, PersistenceParams
from loadboard_app.data.models import Load
from loadboard_app.data.seed import default_app_state
from loadboard_app.delivery.mailto_delivery import MailtoDelivery
from loadboard_app.delivery.stdout_delivery import StdoutDelivery
from loadboard_app.persistence.file_gateway import JsonFileGateway
from loadboard_app.persistence.http_gateway import HttpJsonGateway
from loadboard_app.persistence.memory_gateway import InMemoryGateway
from loadboard_app.persistence.sqlite_gateway import SqliteDocumentGateway
from loadboard_app.service import (
    LOAD_NOT_FOUND_MESSAGE,
    LoadBoardService,
    OperationResult,
    build_delivery,
    build_gateway,
)

MEMORY = {"persistence": {"backend": "memory"}}


@pytest.fixture
def opener():
    return Mock(return_value=True)


@pytest.fixture
def gateway():
    return InMemoryGateway()


@pytest.fixture
def service(tmp_path, gateway, opener):
    return LoadBoardService.create(
        config_dir=tmp_path,
        overrides=MEMORY,
        gateway=gateway,
        delivery=MailtoDelivery(opener=opener),
    )


class TestFactories:
    """Test gateway and delivery construction from configuration."""

    def test_build_gateways(self, tmp_path):
        assert isinstance(build_gateway(PersistenceParams(backend="memory")), InMemoryGateway)
        assert isinstance(
            build_gateway(PersistenceParams(backend="file", path=str(tmp_path / "b.json"))),
            JsonFileGateway
        )
        assert isinstance(
            build_gateway(PersistenceParams(backend="sqlite", path=str(tmp_path / "b.db"))),
            SqliteDocumentGateway
        )
        assert isinstance(
            build_gateway(PersistenceParams(backend="http", url="https://store.example.com/x")),
            HttpJsonGateway
        )

    def test_http_without_url(self):
        with pytest.raises(ValueError):
            build_gateway(PersistenceParams(backend="http"))

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_gateway(PersistenceParams(backend="tape"))

    def test_build_delivery(self):
        assert isinstance(build_delivery(NotificationParams(method="mailto")), MailtoDelivery)
        assert isinstance(build_delivery(NotificationParams(method="stdout")), StdoutDelivery)
        with pytest.raises(ValueError):
            build_delivery(NotificationParams(method="pigeon"))


class TestCreate:
    """Test LoadBoardService.create."""

    def test_seeded_board(self, service):
        assert [load.id for load in service.list_loads()][:2] == ["load-1", "load-2"]

    def test_invalid_configuration(self, tmp_path):
        with pytest.raises(ValueError, match="store.max_destinations"):
            LoadBoardService.create(tmp_path, overrides={**MEMORY, "store": {"max_destinations": 5}})

    def test_notifications_disabled(self, tmp_path, sample_draft, opener):
        service = LoadBoardService.create(
            tmp_path,
            overrides={**MEMORY, "notifications": {"enabled": False}},
            delivery=MailtoDelivery(opener=opener),
        )

        service.post_load(sample_draft)
        opener.assert_not_called()


class TestOperations:
    """Test user-facing operation results."""

    def test_post_load_notifies(self, service, sample_draft, opener):
        result = service.post_load(sample_draft)

        assert result.success
        assert isinstance(result.value, Load)
        assert service.get_load(result.value.id) == result.value
        link = opener.call_args[0][0]
        assert "bcc=carrier1@example.com," in link

    def test_post_load_invalid(self, service, sample_draft):
        result = service.post_load(replace(sample_draft, origin=""))

        assert result == OperationResult(success=False, message="Origin is required")

    def test_post_load_storage_failure(self, service, gateway, sample_draft):
        service.list_loads()
        with patch.object(gateway, "_write_document", side_effect=OSError("offline")):
            result = service.post_load(sample_draft)

        assert not result.success
        assert result.message == "Failed to post load."
        assert len(service.list_loads()) == len(default_app_state().loads)

    def test_update_missing_load(self, service, sample_load):
        result = service.update_load(replace(sample_load, id="ghost"))
        assert result.message == LOAD_NOT_FOUND_MESSAGE

    def test_update_load(self, service):
        load = service.get_load("load-2")
        result = service.update_load(replace(load, details="Call ahead"))

        assert result.success
        assert result.value.bids == load.bids

    def test_update_storage_failure(self, service, gateway):
        load = service.get_load("load-2")
        with patch.object(gateway, "_write_document", side_effect=OSError("offline")):
            result = service.update_load(replace(load, details="Call ahead"))

        assert result.message == "Failed to update load."

    def test_remove_load(self, service, gateway):
        assert service.remove_load("load-1").success
        assert service.get_load("load-1") is None

        with patch.object(gateway, "_write_document", side_effect=OSError("offline")):
            assert service.remove_load("load-2").message == "Failed to remove load."

    def test_add_bid(self, service):
        result = service.add_bid("load-4", "Mountain Freight", 2100, transit_days=3)

        assert result.success
        assert service.get_load("load-4").lowest_bid() == result.value

    def test_add_bid_invalid_amount(self, service):
        result = service.add_bid("load-4", "Mountain Freight", 0)
        assert result.message == "Please enter a valid bid amount."

    def test_add_bid_unknown_load(self, service):
        assert service.add_bid("ghost", "Carrier", 10).message == LOAD_NOT_FOUND_MESSAGE

    def test_subscribe_messages(self, service, gateway):
        assert service.subscribe_carrier_email("new@carrier.example").message == \
            "You have been successfully subscribed!"
        assert service.subscribe_carrier_email("NEW@carrier.example").message == \
            "This email is already subscribed."
        assert service.subscribe_carrier_email("nope").message == \
            "Please enter a valid email address."

        with patch.object(gateway, "_write_document", side_effect=OSError("offline")):
            result = service.subscribe_carrier_email("other@carrier.example")
        assert result.message == "An error occurred. Please try again."


class TestBidEmail:
    """Test LoadBoardService.send_bid_email."""

    def test_opens_bid_draft(self, service, opener):
        result = service.send_bid_email("load-1", "Cross Country Movers", 4400, 5)

        assert result.success
        link = opener.call_args[0][0]
        assert link.startswith("mailto:dispatch@loadboard.example?subject=Bid%20for%20Load%20%23TR-PBI-001")

    def test_requires_transit_days(self, service, opener):
        result = service.send_bid_email("load-1", "Carrier", 4400, None)

        assert result.message == "Please enter a valid number of transit days."
        opener.assert_not_called()

    def test_unknown_load(self, service):
        assert service.send_bid_email("ghost", "Carrier", 10, 1).message == LOAD_NOT_FOUND_MESSAGE

    def test_mail_client_unavailable(self, service, opener):
        opener.return_value = False
        assert not service.send_bid_email("load-1", "Carrier", 10, 1).success


class TestRouteDistance:
    """Test LoadBoardService.route_distance."""

    def test_seed_load_distance(self, service):
        assert service.route_distance("load-1") == pytest.approx(2451, abs=10)

    def test_unresolvable_route(self, service, sample_draft):
        load = service.post_load(replace(sample_draft, destinations=("Springfield, MO",))).value
        assert service.route_distance(load.id) is None


class TestStoredData:
    """Stored loads that break the load rules never reach an operation."""

    @pytest.mark.parametrize("destinations", [[], ["Dallas, TX", "Denver, CO", "Miami, FL", "Boston, MA"]])
    def test_bid_email_on_invalid_stored_load(self, tmp_path, sample_state, opener, destinations):
        document = sample_state.to_dict()
        document["loads"][0]["destinations"] = destinations
        gateway = InMemoryGateway(document=json.dumps(document))
        service = LoadBoardService.create(
            tmp_path, overrides=MEMORY, gateway=gateway, delivery=MailtoDelivery(opener=opener)
        )

        assert service.list_loads() == []
        assert service.send_bid_email("load-a", "Acme", 1200, 2).message == LOAD_NOT_FOUND_MESSAGE
        opener.assert_not_called()
