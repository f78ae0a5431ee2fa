"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from eventbooking import models
from eventbooking.handlers.views import EVENT_LIST_KEY, event_detail_key
from tests.helpers import event_fields, png_upload


def create_event(api_client: APIClient, **overrides) -> dict:
    response = api_client.post(
        "/api/events",
        {**event_fields(**overrides), "image": png_upload()},
        format="multipart",
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.django_db
class TestResponseCache:
    """Tests for cached GET responses."""

    def test_list_response_is_cached(self, api_client: APIClient):
        api_client.get("/api/events")
        assert cache.get(EVENT_LIST_KEY) == []

    def test_detail_cached_under_canonical_refs(self, api_client: APIClient):
        event = create_event(api_client)

        api_client.get("/api/events/demo")
        api_client.get(f"/api/events/{event['id']}")

        assert cache.get(event_detail_key("demo"))["id"] == event["id"]
        assert cache.get(event_detail_key(event["id"]))["slug"] == "demo"

    def test_non_canonical_ref_is_not_cached(self, api_client: APIClient):
        event = create_event(api_client)
        upper = event["id"].upper()

        assert api_client.get(f"/api/events/{upper}").status_code == 200
        assert cache.get(event_detail_key(upper)) is None


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_new_event_invalidates_list_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        assert api_client.get("/api/events").json() == []

        with django_capture_on_commit_callbacks(execute=True):
            create_event(api_client)

        assert [e["slug"] for e in api_client.get("/api/events").json()] == ["demo"]

    def test_event_save_invalidates_detail_cache(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        event = create_event(api_client)
        api_client.get("/api/events/demo")
        api_client.get(f"/api/events/{event['id']}")

        with django_capture_on_commit_callbacks(execute=True):
            models.Event.objects.get(pk=event["id"]).save()

        assert cache.get(event_detail_key("demo")) is None
        assert cache.get(event_detail_key(event["id"])) is None

    def test_event_delete_invalidates_caches(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        create_event(api_client)
        api_client.get("/api/events")
        api_client.get("/api/events/demo")

        with django_capture_on_commit_callbacks(execute=True):
            models.Event.objects.get(slug="demo").delete()

        assert cache.get(EVENT_LIST_KEY) is None
        assert api_client.get("/api/events/demo").status_code == 404

    def test_booking_does_not_touch_event_cache(self, api_client: APIClient):
        create_event(api_client)
        api_client.get("/api/events/demo")

        api_client.post("/api/events/demo/book", {"email": "a@x.com"}, format="json")

        assert cache.get(event_detail_key("demo")) is not None

    def test_invalidation_waits_for_commit(
        self, api_client: APIClient, django_capture_on_commit_callbacks
    ):
        create_event(api_client)
        api_client.get("/api/events")

        with django_capture_on_commit_callbacks() as callbacks:
            models.Event.objects.get(slug="demo").save()
            assert cache.get(EVENT_LIST_KEY) is not None

        assert cache.get(EVENT_LIST_KEY) is not None
        assert len(callbacks) == 1

        callbacks[0]()

        assert cache.get(EVENT_LIST_KEY) is None
