import random
import string
from typing import Literal

from experience_x.themes.catalog import ThemeBundle

Tier = Literal["simple", "enhanced"]

SIMPLE_THEME_LABELS = (
    "Digital Dreamscape",
    "Neural Wonderland",
    "Quantum Playground",
    "Virtual Symphony",
    "Holographic Garden",
)
EXPERIENCE_ID_LENGTH = 9
EXPERIENCE_ID_ALPHABET = string.ascii_uppercase + string.digits


class FallbackComposer:
    """Render a theme bundle and the query into a narrative document without the remote model."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def compose(self, query: str, theme: ThemeBundle, tier: Tier = "enhanced") -> str:
        if tier == "simple":
            return self.compose_simple(query)
        return self.compose_enhanced(query, theme)

    def compose_simple(self, query: str) -> str:
        label = self.rng.choice(SIMPLE_THEME_LABELS)
        return "\n".join(
            [
                f"**Experience Generated:** {label}",
                "",
                f'Your query "{query}" has opened a portal to a new digital dimension.',
                "",
                "**Environment:** A shimmering landscape of pure potential awaits. Colors shift with your "
                "thoughts, and sounds harmonize with your intentions.",
                "",
                "**Interaction:** Reach out with your mind. The reality will respond, shaping itself to your "
                "deepest curiosities.",
                "",
                "**Status:** Reality matrix stable. Immersion complete.",
                "",
                "Continue exploring...",
            ]
        )

    def compose_enhanced(self, query: str, theme: ThemeBundle) -> str:
        experience_id = self.experience_id()
        return "\n".join(
            [
                "🌟 **IMMERSIVE EXPERIENCE v2.0** 🌟",
                f"**ID:** {experience_id}",
                f'**Query:** "{query}"',
                "**Status:** REALITY GENERATED",
                "",
                f"## {theme.name}",
                "",
                theme.describe(query),
                "",
                "### SENSORY INPUT",
                *[f"• {element}" for element in theme.elements],
                "",
                "### INTERACTIVE PROTOCOL",
                theme.interaction,
                "",
                "### ENVIRONMENTAL DATA",
                "- Temporal Stability: ▰▰▰▰▰▰▰▰▰▰ 100%",
                "- Spatial Coherence: Optimal",
                "- Consciousness Sync: Established",
                "- Reality Fidelity: 99.7%",
                "",
                "### DYNAMIC SYSTEMS",
                "The experience will now evolve based on:",
                "1. **Attention Modulation** - Changes with your focus",
                "2. **Emotional Resonance** - Adapts to your feelings",
                "3. **Temporal Layers** - Unfolds over perceived time",
                "4. **Quantum Entanglement** - Connects to parallel experiences",
                "",
                "### QUERY RESONANCE",
                f'Your question "{query}" has created unique resonance patterns in the digital fabric. '
                "These patterns will continue to influence the experience as it unfolds.",
                "",
                "### CONTROL INTERFACE",
                "To modify the experience:",
                "• Focus on an element to enhance it",
                "• Blink twice to shift perspective",
                '• Think "deeper" to access hidden layers',
                '• Imagine "expand" to increase scale',
                "",
                "---",
                "",
                "**Experience Duration:** Perpetual",
                "**Reality Anchor:** Stable",
                '**Return Protocol:** Activated by thought command "awaken"',
                "",
                "---",
                "",
                "*This digital realm is now part of your consciousness.",
                "It remembers, learns, and evolves with you.",
                "Welcome to Experience.X, where every query creates a new reality.*",
            ]
        )

    def experience_id(self) -> str:
        return "".join(self.rng.choice(EXPERIENCE_ID_ALPHABET) for _ in range(EXPERIENCE_ID_LENGTH))
