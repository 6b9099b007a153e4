"""Tests for the planner controller: navigation, folders and cache refreshes."""

from datetime import date

import pytest

from day_planner.controller import PlannerController
from day_planner.dates import planner_path
from day_planner.models import PlannerDay, SessionStatus
from day_planner.storage import WORKING_DIRECTORY_KEY, SettingsStore

WEDNESDAY = date(2025, 11, 12)


@pytest.fixture
def settings_store(app_settings) -> SettingsStore:
    return SettingsStore(app_settings.settings_file)


@pytest.fixture
def controller(storage, settings_store, app_settings) -> PlannerController:
    return PlannerController(storage, settings_store, app_settings)


@pytest.mark.asyncio
async def test_startup_uses_default_directory(controller, app_settings):
    status = await controller.startup(WEDNESDAY)

    assert status == SessionStatus.NOT_FOUND
    assert controller.working_directory == app_settings.default_working_directory
    assert controller.week_header() == "Week of Nov 10"


@pytest.mark.asyncio
async def test_startup_uses_saved_directory(controller, storage, settings_store):
    settings_store.set(WORKING_DIRECTORY_KEY, "/saved")
    storage.files[planner_path(WEDNESDAY, "/saved")] = PlannerDay(date="11/12/2025")

    status = await controller.startup(WEDNESDAY)

    assert status == SessionStatus.LOADED
    assert controller.working_directory == "/saved"
    assert controller.cache.has_file(WEDNESDAY)


@pytest.mark.asyncio
async def test_startup_override_is_not_persisted(controller, settings_store):
    await controller.startup(WEDNESDAY, "/override")

    assert controller.working_directory == "/override"
    assert settings_store.get(WORKING_DIRECTORY_KEY) is None


@pytest.mark.asyncio
async def test_create_refreshes_cache(controller):
    await controller.startup(WEDNESDAY, "/planner")
    assert not controller.cache.has_file(WEDNESDAY)

    status = await controller.create_day()

    assert status == SessionStatus.LOADED
    assert controller.cache.has_file(WEDNESDAY)


@pytest.mark.asyncio
async def test_same_week_selection_reuses_cache(controller, storage):
    await controller.startup(WEDNESDAY, "/planner")
    checks_after_startup = len(storage.checks)

    await controller.select_date(date(2025, 11, 14))

    # Only the session's own existence check ran
    assert len(storage.checks) == checks_after_startup + 1


@pytest.mark.asyncio
async def test_week_navigation_refreshes_cache(controller, storage):
    storage.files[planner_path(date(2025, 11, 19), "/planner")] = PlannerDay(date="11/19/2025")
    await controller.startup(WEDNESDAY, "/planner")

    await controller.next_week()

    assert controller.selected_date == date(2025, 11, 19)
    assert controller.week[0] == date(2025, 11, 17)
    assert controller.cache.has_file(date(2025, 11, 19))
    assert controller.session.status == SessionStatus.LOADED

    await controller.previous_week()
    assert controller.selected_date == WEDNESDAY
    assert controller.cache.existing == set()


@pytest.mark.asyncio
async def test_change_working_directory(controller, storage):
    storage.files[planner_path(WEDNESDAY, "/other")] = PlannerDay(date="11/12/2025")
    await controller.startup(WEDNESDAY, "/planner")
    storage.folder = "/other"

    selected = await controller.change_working_directory()

    assert selected == "/other"
    assert controller.working_directory == "/other"
    assert controller.cache.has_file(WEDNESDAY)
    assert controller.session.status == SessionStatus.LOADED


@pytest.mark.asyncio
async def test_cancelled_folder_selection_changes_nothing(controller, storage):
    await controller.startup(WEDNESDAY, "/planner")
    storage.folder = None

    assert await controller.change_working_directory() is None
    assert controller.working_directory == "/planner"


@pytest.mark.asyncio
async def test_set_working_directory_persists(controller, settings_store):
    await controller.startup(WEDNESDAY, "/planner")

    await controller.set_working_directory("/new")

    assert controller.working_directory == "/new"
    assert settings_store.get(WORKING_DIRECTORY_KEY) == "/new"
