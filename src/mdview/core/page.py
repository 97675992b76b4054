"""Page assembly.

Wraps rendered HTML and the navigation menu into the bundled page template.
"""

from dataclasses import dataclass

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape
from markupsafe import Markup

from mdview.core.navigation import Navigation
from mdview.errors import RenderError

LIGHT_TEMPLATE = "light.html"
DARK_TEMPLATE = "dark.html"


@dataclass(frozen=True)
class RenderedPage:
    """Template context for a single response."""

    navigation: Navigation
    body: Markup


class PageBuilder:
    """Builds full HTML pages around rendered content.

    The template variant is fixed at construction, every page shares the
    same navigation.
    """

    def __init__(self, navigation: Navigation, *, dark: bool = False) -> None:
        """Initialize page builder.

        Args:
            navigation: Navigation shown on every page
            dark: Use the dark template variant
        """
        self._navigation = navigation
        env = Environment(
            loader=PackageLoader("mdview", "templates"),
            autoescape=select_autoescape(["html"]),
        )
        self._template = env.get_template(DARK_TEMPLATE if dark else LIGHT_TEMPLATE)

    @property
    def navigation(self) -> Navigation:
        """Navigation shown on every page."""
        return self._navigation

    def build(self, body: str) -> str:
        """Wrap an HTML fragment into a page.

        Args:
            body: Trusted HTML inserted verbatim into the content region

        Returns:
            Complete HTML document

        Raises:
            RenderError: If the template fails to render
        """
        page = RenderedPage(navigation=self._navigation, body=Markup(body))
        try:
            return self._template.render(page=page)
        except TemplateError as e:
            raise RenderError(f"Failed to render page template: {e}") from e
