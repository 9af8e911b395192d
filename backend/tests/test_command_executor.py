"""Tests for the command executor against an in-memory store."""

import pytest

from astra.pipeline.command_executor import (
    execute_command,
    find_page_index,
    plan_command,
    resolve_active_page_id,
    slugify_path,
)
from astra.schemas.command import AddPageCommand, DeletePageCommand, RenamePageCommand
from conftest import make_blueprint, make_page


@pytest.fixture
def home_only(fake_store):
    return fake_store.add(make_blueprint(make_page("Home", page_id="home")))


@pytest.fixture
def three_pages(fake_store):
    return fake_store.add(make_blueprint(
        make_page("Home", page_id="home"),
        make_page("About", page_id="about"),
        make_page("Contact", page_id="contact"),
    ))


class TestSlug:

    def test_lowercases_and_hyphenates(self):
        assert slugify_path("Team Members") == "/team-members"

    def test_collapses_whitespace_runs(self):
        assert slugify_path("Our \t  Big   Team") == "/our-big-team"


class TestAddPage:

    async def test_appends_and_activates(self, fake_store, home_only):
        result = await execute_command(fake_store, AddPageCommand(page_name="About Us"), home_only)

        assert result is not None
        pages = result.updated_blueprint.pages
        assert [p.name for p in pages] == ["Home", "About Us"]
        new_page = pages[-1]
        assert new_page.title == "About Us"
        assert new_page.path == "/about-us"
        assert new_page.content == "This is the About Us page."
        assert new_page.components == []
        assert new_page.id.startswith("page_")
        assert result.new_active_page_id == new_page.id

    async def test_no_dedup(self, fake_store, home_only):
        first = await execute_command(fake_store, AddPageCommand(page_name="About"), home_only)
        second = await execute_command(fake_store, AddPageCommand(page_name="About"), first.updated_blueprint)

        abouts = [p for p in second.updated_blueprint.pages if p.name == "About"]
        assert len(abouts) == 2
        assert abouts[0].id != abouts[1].id

    async def test_persists_through_store_update(self, fake_store, home_only):
        await execute_command(fake_store, AddPageCommand(page_name="About"), home_only)

        (blueprint_id, updates), = fake_store.update_calls
        assert blueprint_id == home_only.id
        assert [p.name for p in updates.pages] == ["Home", "About"]
        assert (await fake_store.get(home_only.id)).page_names == ["Home", "About"]

    async def test_input_snapshot_untouched(self, fake_store, home_only):
        await execute_command(fake_store, AddPageCommand(page_name="About"), home_only)
        assert home_only.page_names == ["Home"]


class TestRenamePage:

    async def test_renames_in_place(self, fake_store, three_pages):
        result = await execute_command(
            fake_store, RenamePageCommand(old_name="about", new_name="Our Story"), three_pages
        )

        page = result.updated_blueprint.pages[1]
        assert page.id == "about"
        assert (page.name, page.title, page.path) == ("Our Story", "Our Story", "/our-story")
        assert result.new_active_page_id is None

    async def test_case_insensitive_match(self, fake_store, three_pages):
        result = await execute_command(fake_store, RenamePageCommand(old_name="HOME", new_name="Y"), three_pages)
        assert result.updated_blueprint.pages[0].name == "Y"

    async def test_round_trip_restores_page(self, fake_store, three_pages):
        original = three_pages.pages[1]

        there = await execute_command(fake_store, RenamePageCommand(old_name="About", new_name="X"), three_pages)
        back = await execute_command(
            fake_store, RenamePageCommand(old_name="X", new_name="About"), there.updated_blueprint
        )

        restored = back.updated_blueprint.pages[1]
        assert (restored.name, restored.title, restored.path) == (original.name, original.title, original.path)
        assert restored.id == original.id == there.updated_blueprint.pages[1].id

    async def test_matches_title_when_name_differs(self, fake_store):
        blueprint = fake_store.add(make_blueprint(
            make_page("Home", page_id="home"),
            make_page("team", page_id="team", title="Our Team"),
        ))
        result = await execute_command(fake_store, RenamePageCommand(old_name="our team", new_name="People"), blueprint)
        assert result.updated_blueprint.pages[1].id == "team"

    async def test_first_match_wins(self, fake_store):
        blueprint = fake_store.add(make_blueprint(
            make_page("Home", page_id="home"),
            make_page("Blog", page_id="blog-1"),
            make_page("Blog", page_id="blog-2"),
        ))
        result = await execute_command(fake_store, RenamePageCommand(old_name="blog", new_name="News"), blueprint)
        assert [p.name for p in result.updated_blueprint.pages] == ["Home", "News", "Blog"]

    async def test_missing_page_is_noop(self, fake_store, three_pages):
        result = await execute_command(fake_store, RenamePageCommand(old_name="Pricing", new_name="Plans"), three_pages)
        assert result is None
        assert fake_store.update_calls == []


class TestDeletePage:

    async def test_deletes_page(self, fake_store, three_pages):
        result = await execute_command(fake_store, DeletePageCommand(page_name="about"), three_pages)
        assert result.updated_blueprint.page_names == ["Home", "Contact"]
        assert result.new_active_page_id is None

    async def test_deleting_active_page_activates_first(self, fake_store, three_pages):
        result = await execute_command(
            fake_store, DeletePageCommand(page_name="Home"), three_pages, active_page_id="home"
        )
        assert result.new_active_page_id == "about"

    async def test_deleting_other_page_keeps_active(self, fake_store, three_pages):
        result = await execute_command(
            fake_store, DeletePageCommand(page_name="Contact"), three_pages, active_page_id="about"
        )
        assert result.new_active_page_id is None
        assert resolve_active_page_id(result.updated_blueprint, "about") == "about"

    async def test_refuses_last_page(self, fake_store, home_only):
        result = await execute_command(fake_store, DeletePageCommand(page_name="Home"), home_only)

        assert result is None
        assert fake_store.update_calls == []
        assert len((await fake_store.get(home_only.id)).pages) == 1

    async def test_missing_page_is_noop(self, fake_store, three_pages):
        assert await execute_command(fake_store, DeletePageCommand(page_name="Pricing"), three_pages) is None


class TestStoreFailure:

    async def test_failed_update_reports_no_change(self, fake_store, home_only):
        fake_store.fail_updates = True
        result = await execute_command(fake_store, AddPageCommand(page_name="About"), home_only)
        assert result is None
        assert (await fake_store.get(home_only.id)).page_names == ["Home"]


class TestPlanning:

    def test_plan_is_pure(self, three_pages):
        plan = plan_command(DeletePageCommand(page_name="About"), three_pages, active_page_id="about")
        assert [p.id for p in plan.pages] == ["home", "contact"]
        assert plan.new_active_page_id == "home"
        assert three_pages.page_names == ["Home", "About", "Contact"]

    def test_find_page_index_none_when_absent(self, three_pages):
        assert find_page_index(three_pages.pages, "Settings") is None

    def test_resolve_active_falls_back_to_first(self, three_pages):
        assert resolve_active_page_id(three_pages, "gone") == "home"
        assert resolve_active_page_id(three_pages, None) == "home"
