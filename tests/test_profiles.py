"""Profile data access: create/get/find/update and the settings fetch-or-create flow."""

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from research_navigator.core.errors import NotFound, RemoteReadError, RemoteWriteError
from research_navigator.modules.profiles.schemas import ProfileCreate, ProfileUpdate
from research_navigator.modules.profiles.service import ProfileService


def test_create_then_get_returns_inserted_fields(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    created = service.create_profile("user-1", ProfileCreate(
        name="Ada",
        dob=date(1990, 12, 10),
        currently_pursuing="PhD",
        interests=["AI", "NLP"],
        phone="555-0100",
    ))
    fetched = service.get_profile("user-1")
    assert fetched == created
    assert fetched.user_id == "user-1"
    assert fetched.name == "Ada"
    assert fetched.dob == date(1990, 12, 10)
    assert fetched.currently_pursuing == "PhD"
    assert fetched.interests == ["AI", "NLP"]
    assert fetched.phone == "555-0100"


def test_interests_default_to_empty(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    service.create_profile("user-1", ProfileCreate(name="Ada"))
    assert service.get_profile("user-1").interests == []
    assert fake_supabase.tables["profiles"][0]["interests"] == []


def test_interests_are_a_set_of_tags(fake_supabase) -> None:
    profile = ProfileService(fake_supabase).create_profile(
        "user-1", ProfileCreate(interests=["AI", "AI", " ML ", ""])
    )
    assert profile.interests == ["AI", "ML"]


def test_second_profile_for_same_user_is_a_write_error(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    service.create_profile("user-1", ProfileCreate(name="Ada"))
    with pytest.raises(RemoteWriteError):
        service.create_profile("user-1", ProfileCreate(name="Ada again"))
    assert len(fake_supabase.tables["profiles"]) == 1


def test_get_profile_missing_is_not_found(fake_supabase) -> None:
    with pytest.raises(NotFound):
        ProfileService(fake_supabase).get_profile("nobody")


def test_get_profile_transport_failure_is_read_error(fake_supabase) -> None:
    fake_supabase.fail("profiles", "select")
    with pytest.raises(RemoteReadError) as exc_info:
        ProfileService(fake_supabase).get_profile("user-1")
    assert exc_info.value.__cause__ is not None


def test_find_profile_returns_none_when_absent(fake_supabase) -> None:
    assert ProfileService(fake_supabase).find_profile("user-1") is None


def test_get_or_create_creates_once(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    first, created = service.get_or_create_profile("user-1")
    assert created is True
    assert first.name == "" and first.interests == [] and first.dob is None
    second, created_again = service.get_or_create_profile("user-1")
    assert created_again is False
    assert second.id == first.id


def test_update_merges_only_given_fields(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    service.create_profile("user-1", ProfileCreate(name="Ada", phone="555-0100", interests=["AI"]))
    updated = service.update_profile("user-1", ProfileUpdate(currently_pursuing="Masters"))
    assert updated.currently_pursuing == "Masters"
    assert updated.name == "Ada"
    assert updated.phone == "555-0100"
    assert updated.interests == ["AI"]


def test_update_can_clear_dob(fake_supabase) -> None:
    service = ProfileService(fake_supabase)
    service.create_profile("user-1", ProfileCreate(dob=date(2000, 1, 1)))
    assert service.update_profile("user-1", ProfileUpdate(dob=None)).dob is None


def test_update_without_profile_is_write_error(fake_supabase) -> None:
    with pytest.raises(RemoteWriteError):
        ProfileService(fake_supabase).update_profile("nobody", ProfileUpdate(name="X"))


def test_profile_routes(client, fake_supabase, bearer) -> None:
    token = fake_supabase.register("ada@example.com")
    headers = bearer(token)

    resp = client.get("/api/v1/profiles/me", headers=headers)
    assert resp.status_code == 404

    resp = client.post("/api/v1/profiles/me/ensure", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["created"] is True
    assert resp.json()["profile"]["user_id"] == fake_supabase.user_id_for(token)

    resp = client.patch("/api/v1/profiles/me", json={"name": "Ada", "interests": ["AI"]}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Ada"
    assert resp.json()["interests"] == ["AI"]

    resp = client.post("/api/v1/profiles", json={"name": "Dup"}, headers=headers)
    assert resp.status_code == 502

    resp = client.get("/api/v1/profiles/me", headers=headers)
    assert resp.json()["name"] == "Ada"


def test_profile_routes_require_token(client) -> None:
    resp = client.get("/api/v1/profiles/me")
    assert resp.status_code in (401, 403)
    resp = client.get("/api/v1/profiles/me", headers={"Authorization": "Bearer forged"})
    assert resp.status_code == 401


def test_null_for_required_text_field_is_rejected() -> None:
    with pytest.raises(PydanticValidationError):
        ProfileUpdate(name=None)
    assert ProfileUpdate(dob=None).model_dump(exclude_unset=True) == {"dob": None}


def test_patch_null_name_is_unprocessable(client, fake_supabase, bearer) -> None:
    headers = bearer(fake_supabase.register("ada@example.com"))
    client.post("/api/v1/profiles", json={"name": "Ada"}, headers=headers)

    resp = client.patch("/api/v1/profiles/me", json={"name": None}, headers=headers)
    assert resp.status_code == 422
    assert ("profiles", "update") not in fake_supabase.calls
    assert client.get("/api/v1/profiles/me", headers=headers).json()["name"] == "Ada"


def test_rows_with_null_text_columns_still_load(fake_supabase) -> None:
    fake_supabase.tables["profiles"] = [{
        "id": "p1", "user_id": "legacy", "name": "Grace", "dob": None,
        "currently_pursuing": None, "interests": None, "phone": None,
        "created_at": "2024-01-01T00:00:00+00:00",
    }]
    profile = ProfileService(fake_supabase).get_profile("legacy")
    assert profile.name == "Grace"
    assert profile.phone == ""
    assert profile.currently_pursuing == ""
    assert profile.interests == []
