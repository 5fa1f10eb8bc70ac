import logging
from collections.abc import Mapping, Sequence

from experience_x.themes.catalog import DEFAULT_THEME_KEY, THEME_CATALOG, THEME_TRIGGERS, ThemeBundle

logger = logging.getLogger(__name__)


class ThemeSelector:
    """First-token-first-match keyword router over the theme catalog."""

    def __init__(
        self,
        catalog: Mapping[str, ThemeBundle] | None = None,
        triggers: Sequence[tuple[str, Sequence[str]]] | None = None,
        default_key: str = DEFAULT_THEME_KEY,
    ) -> None:
        self.catalog = catalog if catalog is not None else THEME_CATALOG
        self.triggers = triggers if triggers is not None else THEME_TRIGGERS
        self.default_key = default_key

    def select(self, query: str) -> ThemeBundle:
        key = self.match_key(query)
        return self.catalog[key]

    def match_key(self, query: str) -> str:
        for token in query.lower().split():
            for theme_key, keywords in self.triggers:
                if any(keyword in token for keyword in keywords):
                    logger.debug("theme.matched key=%s token=%s", theme_key, token)
                    return theme_key
        return self.default_key
