import random

NOISE_CHARS = frozenset("�*_`")
EMPHASIS_MARKUP = "**"
EMPHASIS_MIN_CHARS = 100
PARAGRAPH_DELIMITER = "\n\n"

HEADERS = (
    "🌌 **DIGITAL REALITY MANIFESTED** 🌌",
    "⚡ **NEURAL INTERFACE ACTIVATED** ⚡",
    "🌀 **QUANTUM FIELD STABILIZED** 🌀",
    "✨ **SENSORY MATRIX ENGAGED** ✨",
)
FOOTERS = (
    "---\n*Reality continues to evolve. Your presence shapes this digital realm.*",
    "---\n*The experience adapts to your consciousness. Every moment is unique.*",
    "---\n*Digital echoes resonate. The simulation learns from your interaction.*",
)

TITLE_PREFIX = "## "
EMPHASIS_PREFIX = "→ "
BULLET_PREFIX = "• "


class ResponseFormatter:
    """Wrap free model text in the immersive presentation: header, marked paragraphs, footer."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def format(self, raw_text: str) -> str:
        header = self.rng.choice(HEADERS)
        blocks = [header]
        for index, (raw, cleaned) in enumerate(self.split_paragraphs(raw_text)):
            if index == 0:
                blocks.append(f"{TITLE_PREFIX}{cleaned}")
            elif EMPHASIS_MARKUP in raw or len(cleaned) > EMPHASIS_MIN_CHARS:
                blocks.append(f"{EMPHASIS_PREFIX}{cleaned}")
            else:
                blocks.append(f"{BULLET_PREFIX}{cleaned}")
        blocks.append(self.rng.choice(FOOTERS))
        return PARAGRAPH_DELIMITER.join(blocks)

    @staticmethod
    def strip_noise(text: str) -> str:
        return "".join(ch for ch in text if ch not in NOISE_CHARS)

    @classmethod
    def split_paragraphs(cls, raw_text: str) -> list[tuple[str, str]]:
        """Return ``(raw, cleaned)`` pairs for every paragraph that is non-empty once noise is removed.

        The raw paragraph is kept so emphasis markup can be detected after it has been stripped.
        """
        paragraphs: list[tuple[str, str]] = []
        normalized = raw_text.replace("\r\n", "\n")
        for raw in normalized.split(PARAGRAPH_DELIMITER):
            cleaned = cls.strip_noise(raw).strip()
            if not cleaned:
                continue
            paragraphs.append((raw, cleaned))
        return paragraphs
