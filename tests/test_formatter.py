import random

from experience_x.compose.fallback import FallbackComposer
from experience_x.compose.formatter import FOOTERS, HEADERS, ResponseFormatter
from experience_x.themes.catalog import THEME_CATALOG


def _formatter(seed: int = 5) -> ResponseFormatter:
    return ResponseFormatter(random.Random(seed))


def _blocks(text: str) -> list[str]:
    return text.split("\n\n")


def test_empty_input_keeps_header_and_footer() -> None:
    for raw in ["", "***___```", "\n\n\n\n", "�"]:
        text = _formatter().format(raw)
        blocks = _blocks(text)
        assert blocks[0] in HEADERS
        assert blocks[-1] in FOOTERS
        assert len(blocks) == 2


def test_two_paragraphs_render_title_and_one_classified_line() -> None:
    text = _formatter().format("Aurora Cavern\n\nCold light drips from the ceiling.")
    body = _blocks(text)[1:-1]
    assert body == ["## Aurora Cavern", "• Cold light drips from the ceiling."]


def test_emphasis_markup_and_length_pick_arrow_prefix() -> None:
    long_paragraph = "x" * 101
    raw = "\n\n".join(["Title", "**Bold** moment", long_paragraph, "y" * 100])
    body = _blocks(_formatter().format(raw))[1:-1]
    assert body == ["## Title", "→ Bold moment", f"→ {long_paragraph}", f"• {'y' * 100}"]


def test_noise_characters_are_removed() -> None:
    text = _formatter().format("`Ti_tle`\n\nplain � text")
    body = _blocks(text)[1:-1]
    assert body == ["## Title", "• plain  text"]


def test_blank_paragraphs_are_dropped() -> None:
    body = _blocks(_formatter().format("One\n\n   \n\n**\n\nTwo"))[1:-1]
    assert body == ["## One", "• Two"]


def test_arbitrary_unicode_passes_through() -> None:
    text = _formatter().format("🌊 潮汐\n\nΩmega ∞ ✨")
    assert "## 🌊 潮汐" in text
    assert "• Ωmega ∞ ✨" in text


def test_enhanced_fallback_round_trip_keeps_paragraph_count() -> None:
    rng = random.Random(9)
    composed = FallbackComposer(rng).compose("a walk in the forest", THEME_CATALOG["forest"])
    expected = len(ResponseFormatter.split_paragraphs(composed))

    text = ResponseFormatter(rng).format(composed)
    body = _blocks(text)[1:-1]
    assert len(body) == expected
    assert body[0].startswith("## ")
    assert "a walk in the forest" in text
