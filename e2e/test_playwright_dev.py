"""
Browser tests for playwright.dev.
"""

import re

import allure  # type: ignore
import pytest

sync_api = pytest.importorskip("playwright.sync_api")
expect = sync_api.expect

from page_healthcheck.health.config import DEFAULT_URL  # noqa: E402

pytestmark = pytest.mark.e2e


class TestHomepage:
    """Tests for the playwright.dev landing page."""

    @allure.tag("playwright-example", "title")
    def test_has_title(self, page):
        """Test page title mentions Playwright."""
        page.goto(DEFAULT_URL)
        expect(page).to_have_title(re.compile("Playwright"))

    @allure.tag("playwright-example", "link")
    def test_get_started_link(self, page):
        """Test Get started link leads to the Installation page."""
        page.goto(DEFAULT_URL)
        page.get_by_role("link", name="Get started").click()
        expect(page.get_by_role("heading", name="Installation")).to_be_visible()

    @allure.tag("playwright-example", "screenshot")
    def test_visual_comparison(self, page, assert_snapshot):
        """Test the Python landing page against the stored homepage baseline."""
        # Python docs differ from the homepage baseline, producing a visual diff
        page.goto(f"{DEFAULT_URL}python/")
        assert_snapshot(page.screenshot(), "homepage.png")


class TestHealthcheck:
    """Browser counterpart of the live content check."""

    @allure.tag("healthcheck", "heading")
    def test_required_heading_visible(self, page):
        """Test the companies heading is rendered."""
        page.goto(DEFAULT_URL)
        expect(
            page.get_by_role("heading", name="Chosen by companies and open")
        ).to_be_visible()
        expect(page.locator("h2")).to_contain_text(
            ["Chosen by companies and open source projects"]
        )

    @allure.tag("healthcheck", "link")
    @pytest.mark.parametrize("name", ["Get started", "Docs", "API", "Community"])
    def test_navigation_links_visible(self, page, name):
        """Test main navigation links are rendered."""
        page.goto(DEFAULT_URL)
        expect(page.get_by_role("link", name=name, exact=True).first).to_be_visible()
