from experience_x.themes.catalog import THEME_CATALOG
from experience_x.themes.selector import ThemeSelector


def test_forest_query_selects_forest_theme() -> None:
    theme = ThemeSelector().select("a walk in the forest")
    assert theme.key == "forest"
    assert theme.name == "Quantum Forest"


def test_unmatched_query_falls_back_to_space() -> None:
    theme = ThemeSelector().select("quantum nothing")
    assert theme.key == "space"
    assert theme.name == "Star Network"


def test_first_matching_token_wins() -> None:
    selector = ThemeSelector()
    assert selector.match_key("thinking about the deep sea") == "mind"
    assert selector.match_key("the sea makes me think") == "ocean"


def test_priority_breaks_ties_within_one_token() -> None:
    # "seatree" carries both an ocean and a forest trigger; forest is checked first.
    assert ThemeSelector().match_key("seatree") == "forest"


def test_triggers_match_inside_tokens_and_ignore_case() -> None:
    selector = ThemeSelector()
    assert selector.match_key("Underwater CITIES") == "ocean"
    assert selector.match_key("URBANISM rocks") == "city"
    assert selector.match_key("Mindfulness") == "mind"


def test_selection_is_deterministic() -> None:
    selector = ThemeSelector()
    queries = ["tell me about the ocean", "buildings at night", "", "   ", "星空 stars"]
    for query in queries:
        assert selector.select(query) is selector.select(query)


def test_selected_bundle_is_shared_catalog_entry() -> None:
    assert ThemeSelector().select("nature trail") is THEME_CATALOG["forest"]


def test_forest_description_interpolates_query() -> None:
    assert 'As you speak "pine {needles}"' in THEME_CATALOG["forest"].describe("pine {needles}")
    assert "ocean" not in THEME_CATALOG["city"].describe("ocean")
