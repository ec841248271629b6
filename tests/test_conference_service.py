from datetime import date

import pytest

from conference_central_api.app.core.datastore import Entity, Key
from conference_central_api.app.core.exceptions import InvalidEmailError, UnauthorizedError
from conference_central_api.app.core.security import Identity
from conference_central_api.app.schemas.conference import ConferenceForm
from conference_central_api.app.schemas.profile import ProfileForm, TeeShirtSize
from conference_central_api.app.services.conference_service import ConferenceService
from conference_central_api.app.services.profile_service import ProfileService, profile_key


@pytest.fixture
def profiles(datastore):
    return ProfileService(datastore)


@pytest.fixture
def service(datastore, profiles):
    return ConferenceService(datastore, profiles)


def test_create_conference_is_owned_by_caller(service, alice):
    form = ConferenceForm(
        name="PyCon",
        city="Pittsburgh",
        topics=["Programming"],
        start_date=date(2026, 5, 14),
        end_date=date(2026, 5, 22),
        max_attendees=2500,
    )
    conference = service.create_conference(alice, form)

    assert conference.organizer_user_id == "alice-id"
    assert conference.id == 1
    key = Key.from_urlsafe(conference.websafe_key)
    assert key == Key("Conference", 1, profile_key("alice-id"))
    assert Key.from_urlsafe(conference.parent_profile_key) == profile_key("alice-id")
    assert conference.name == "PyCon"
    assert conference.start_date == date(2026, 5, 14)
    assert conference.month == 5
    assert conference.seats_available == 2500


def test_conference_ids_are_allocated_per_owner(service, alice, bob):
    first = service.create_conference(alice, ConferenceForm(name="A"))
    second = service.create_conference(alice, ConferenceForm(name="B"))
    other = service.create_conference(bob, ConferenceForm(name="C"))
    assert (first.id, second.id, other.id) == (1, 2, 1)
    assert first.websafe_key != other.websafe_key


def test_create_conference_materialises_default_profile(service, profiles, alice):
    assert profiles.fetch("alice-id") is None
    service.create_conference(alice, ConferenceForm(name="PyCon"))
    profile = profiles.fetch("alice-id")
    assert profile.display_name == "alice"
    assert profile.tee_shirt_size == TeeShirtSize.NOT_SPECIFIED


def test_create_conference_keeps_existing_profile(service, profiles, alice):
    profiles.save_profile(alice, ProfileForm(display_name="Alice", tee_shirt_size=TeeShirtSize.XL_W))
    service.create_conference(alice, ConferenceForm(name="PyCon"))
    profile = profiles.fetch("alice-id")
    assert profile.display_name == "Alice"
    assert profile.tee_shirt_size == TeeShirtSize.XL_W


def test_conference_without_start_date_has_month_zero(service, alice):
    conference = service.create_conference(alice, ConferenceForm(name="Someday"))
    assert conference.month == 0
    assert conference.seats_available == 0
    assert conference.topics == []


def test_query_conferences_orders_by_name(service, alice, bob):
    service.create_conference(alice, ConferenceForm(name="Beta"))
    service.create_conference(bob, ConferenceForm(name="Alpha"))
    service.create_conference(alice, ConferenceForm(name="Gamma"))
    assert [c.name for c in service.query_conferences()] == ["Alpha", "Beta", "Gamma"]


def test_query_conferences_needs_no_identity(service):
    assert service.query_conferences() == []


def test_get_conferences_created_is_scoped_to_caller(service, alice, bob):
    service.create_conference(alice, ConferenceForm(name="Beta"))
    service.create_conference(bob, ConferenceForm(name="Bob's"))
    service.create_conference(alice, ConferenceForm(name="Alpha"))

    mine = service.get_conferences_created(alice)
    assert [c.name for c in mine] == ["Alpha", "Beta"]
    assert all(c.organizer_user_id == "alice-id" for c in mine)
    assert [c.name for c in service.get_conferences_created(bob)] == ["Bob's"]


def test_unauthenticated_create_writes_nothing(service, datastore):
    with pytest.raises(UnauthorizedError):
        service.create_conference(None, ConferenceForm(name="Sneaky"))
    with pytest.raises(UnauthorizedError):
        service.get_conferences_created(None)
    assert datastore.query("Conference") == []
    assert datastore.query("Profile") == []


def test_malformed_email_fails_before_allocation(service, datastore):
    identity = Identity(user_id="carol-id", email="carol")
    with pytest.raises(InvalidEmailError):
        service.create_conference(identity, ConferenceForm(name="Nope"))
    assert datastore.query("Conference") == []
    assert datastore.allocate_id(profile_key("carol-id"), "Conference") == 1


def test_failed_profile_write_rolls_back_conference(service, profiles, datastore, alice, monkeypatch):
    # The conference row is written first; the profile row cannot be
    # serialised, so the whole batch must roll back.
    monkeypatch.setattr(
        profiles,
        "to_entity",
        lambda profile: Entity(profile_key(profile.user_id), {"display_name": object()}),
    )
    with pytest.raises(TypeError):
        service.create_conference(alice, ConferenceForm(name="PyCon"))
    assert datastore.query("Conference") == []
    assert datastore.get(profile_key("alice-id")) is None


def test_conference_without_name_is_stored_but_not_listed(service, datastore, alice):
    service.create_conference(alice, ConferenceForm(name="Named"))
    nameless = service.create_conference(alice, ConferenceForm(city="Berlin"))
    assert nameless.name is None
    assert nameless.id == 2
    assert len(datastore.query("Conference")) == 2
    assert [c.name for c in service.query_conferences()] == ["Named"]
    assert [c.name for c in service.get_conferences_created(alice)] == ["Named"]


def test_form_values_are_passed_through_unchecked(service, alice):
    conference = service.create_conference(alice, ConferenceForm(name="Odd", max_attendees=-5))
    assert conference.max_attendees == -5
    assert conference.seats_available == -5


def test_create_conference_for_identity_without_email(service, profiles):
    identity = Identity(user_id="dave-id")
    conference = service.create_conference(identity, ConferenceForm(name="A"))
    assert conference.organizer_user_id == "dave-id"
    profile = profiles.fetch("dave-id")
    assert profile.display_name is None
    assert profile.main_email is None
