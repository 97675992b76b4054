"""Tests for page assembly."""

import pytest
from jinja2 import TemplateError
from mdview.core.navigation import Navigation, NavLink
from mdview.core.page import PageBuilder
from mdview.errors import RenderError


@pytest.fixture
def navigation() -> Navigation:
    return Navigation(
        links=(
            NavLink(href="/a", text="/a"),
            NavLink(href="/sub/b", text="/sub/b"),
        )
    )


class TestPageBuilderBuild:
    """Tests for PageBuilder.build()."""

    def test__body__inserted_verbatim(self, navigation: Navigation) -> None:
        """Insert rendered HTML without escaping."""
        html = PageBuilder(navigation).build('<h1 id="x">Title</h1>')

        assert '<div class="data">' in html
        assert '<h1 id="x">Title</h1>' in html

    def test__navigation__listed_in_order(self, navigation: Navigation) -> None:
        """Render navigation links in order."""
        html = PageBuilder(navigation).build("")

        first = html.index('<li><a href="/a">/a</a></li>')
        second = html.index('<li><a href="/sub/b">/sub/b</a></li>')
        assert first < second
        assert html.index('<div class="nav">') < first

    def test__navigation_text__escaped(self) -> None:
        """Escape navigation entries taken from file names."""
        navigation = Navigation(links=(NavLink(href="/a<b>", text="/a<b>"),))

        html = PageBuilder(navigation).build("")

        assert "/a&lt;b&gt;" in html
        assert "/a<b>" not in html

    def test__navigation_href__percent_encoded(self) -> None:
        """Encode URL delimiters in hrefs and keep the route as link text."""
        navigation = Navigation(links=(NavLink(href="/c#1 what?", text="/c#1 what?"),))

        html = PageBuilder(navigation).build("")

        assert '<a href="/c%231%20what%3F">/c#1 what?</a>' in html

    def test__output__is_full_document(self, navigation: Navigation) -> None:
        """Produce a complete HTML document with client-side renderers."""
        html = PageBuilder(navigation).build("<p>x</p>")

        assert html.lstrip().startswith("<!DOCTYPE html>")
        assert "MathJax-script" in html
        assert "hljs.highlightAll();" in html

    def test__template_failure__raises_render_error(
        self,
        navigation: Navigation,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Convert template errors to RenderError."""
        builder = PageBuilder(navigation)

        def explode(**context: object) -> str:
            raise TemplateError("broken template")

        monkeypatch.setattr(builder._template, "render", explode)

        with pytest.raises(RenderError, match="broken template"):
            builder.build("")


class TestPageBuilderTheme:
    """Tests for template selection."""

    def test__default__uses_light_template(self, navigation: Navigation) -> None:
        """Select the light template by default."""
        html = PageBuilder(navigation).build("")

        assert "github-dark-dimmed" in html
        assert "background-color: #24292e;" not in html

    def test__dark__uses_dark_template(self, navigation: Navigation) -> None:
        """Select the dark template when requested."""
        builder = PageBuilder(navigation, dark=True)

        html = builder.build("")

        assert "background-color: #24292e;" in html
        assert "github-dark.min.css" in html

    def test__navigation__shared_by_pages(self, navigation: Navigation) -> None:
        """Expose the navigation given at construction."""
        assert PageBuilder(navigation).navigation is navigation
