import pytest

from models import AppLinkUpsert
from stores import JsonFileStore
from services.app_link_service import (
    AppLinkService,
    AppLinkValidationError,
    AppLinkNotFoundError,
    AppLinkStorageError
)
from conftest import CAT_GAME, DownKVCollection
from stores import MongoDocumentStore

pytestmark = pytest.mark.anyio


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "app-links.json"


@pytest.fixture
def service(store_path):
    return AppLinkService(JsonFileStore(str(store_path)))


async def test_create_defaults_active_and_stamps_created_at(service):
    record, created = await service.upsert(AppLinkUpsert(**CAT_GAME))

    assert created is True
    assert record.active is True
    assert record.createdAt.endswith("Z")

    links = await service.list_all()
    assert len(links) == 1
    assert links[0] == record


async def test_update_keeps_created_at_and_position(service):
    first, _ = await service.upsert(AppLinkUpsert(**CAT_GAME))
    await service.upsert(AppLinkUpsert(id="dog-game", name="Dog Game",
                                       appStoreUrl="https://apps.apple.com/d",
                                       playStoreUrl="https://play.google.com/d"))

    updated, created = await service.upsert(AppLinkUpsert(**{**CAT_GAME, "name": "Cat Game 2", "active": False}))

    assert created is False
    assert updated.createdAt == first.createdAt
    links = await service.list_all()
    assert [l.id for l in links] == ["cat-game", "dog-game"]
    assert links[0].name == "Cat Game 2"
    assert links[0].active is False
    assert links[0].createdAt == first.createdAt


async def test_round_trip_preserves_every_field(service):
    candidate = AppLinkUpsert(**{**CAT_GAME, "active": False})
    await service.upsert(candidate)

    stored = (await service.list_all())[0]
    assert stored.model_dump(exclude={"createdAt"}) == candidate.model_dump()


async def test_validation_lists_every_failure(service, store_path):
    with pytest.raises(AppLinkValidationError) as exc_info:
        await service.upsert(AppLinkUpsert(id="x", name="  ", appStoreUrl="not-a-url"))

    failures = exc_info.value.details["failures"]
    assert "name is required" in failures
    assert "playStoreUrl is required" in failures
    assert "appStoreUrl must be an http(s) URL" in failures
    assert not store_path.exists()


async def test_bad_url_leaves_collection_unchanged(service, store_path):
    await service.upsert(AppLinkUpsert(**CAT_GAME))
    before = store_path.read_bytes()

    with pytest.raises(AppLinkValidationError):
        await service.upsert(AppLinkUpsert(**{**CAT_GAME, "appStoreUrl": "not-a-url"}))

    assert store_path.read_bytes() == before


def test_validate_accepts_http_and_https():
    assert AppLinkService.validate(AppLinkUpsert(
        id="a", name="A", appStoreUrl="http://x", playStoreUrl="https://y"
    )) == []
    assert AppLinkService.validate(AppLinkUpsert(
        id="a", name="A", appStoreUrl="ftp://x", playStoreUrl="https://"
    )) == [
        "appStoreUrl must be an http(s) URL",
        "playStoreUrl must be an http(s) URL",
    ]


def test_validate_reports_mistyped_fields():
    assert AppLinkService.validate(AppLinkUpsert(**{**CAT_GAME, "id": 123, "active": "yes"})) == [
        "id must be a string",
        "active must be true or false",
    ]
    assert AppLinkService.validate(AppLinkUpsert(**{**CAT_GAME, "active": None})) == []


async def test_list_all_includes_inactive(service):
    await service.upsert(AppLinkUpsert(**{**CAT_GAME, "active": False}))

    assert [l.id for l in await service.list_all()] == ["cat-game"]
    assert await service.list_active() == []


async def test_remove_twice_is_not_found_and_does_not_rewrite(service, store_path):
    await service.upsert(AppLinkUpsert(**CAT_GAME))
    await service.upsert(AppLinkUpsert(**{**CAT_GAME, "id": "other"}))

    await service.remove("cat-game")
    after_first = store_path.read_bytes()

    with pytest.raises(AppLinkNotFoundError):
        await service.remove("cat-game")
    assert store_path.read_bytes() == after_first
    assert [l.id for l in await service.list_all()] == ["other"]


async def test_find_active_by_id(service):
    await service.upsert(AppLinkUpsert(**CAT_GAME))

    found = await service.find_active_by_id("cat-game")
    assert found.appStoreUrl == CAT_GAME["appStoreUrl"]

    with pytest.raises(AppLinkNotFoundError):
        await service.find_active_by_id("missing")


async def test_inactive_record_is_not_found(service):
    await service.upsert(AppLinkUpsert(**{**CAT_GAME, "active": False}))

    with pytest.raises(AppLinkNotFoundError):
        await service.find_active_by_id("cat-game")


async def test_remove_then_lookup_is_not_found(service):
    await service.upsert(AppLinkUpsert(**CAT_GAME))
    await service.remove("cat-game")

    with pytest.raises(AppLinkNotFoundError):
        await service.find_active_by_id("cat-game")


async def test_storage_errors_surface_as_service_errors():
    service = AppLinkService(MongoDocumentStore(DownKVCollection(), "app-links"))

    with pytest.raises(AppLinkStorageError) as exc_info:
        await service.list_all()
    assert exc_info.value.code == "STORAGE_UNAVAILABLE"

    with pytest.raises(AppLinkStorageError):
        await service.upsert(AppLinkUpsert(**CAT_GAME))


async def test_malformed_stored_record_is_storage_error(store_path, service):
    store_path.parent.mkdir(parents=True)
    store_path.write_text('[{"id": "broken"}]', encoding="utf-8")

    with pytest.raises(AppLinkStorageError):
        await service.list_all()
