from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_THEME_KEY = "space"


@dataclass(frozen=True)
class ThemeBundle:
    """Descriptive content used to synthesize an experience without the remote model."""

    key: str
    name: str
    description_template: str
    elements: tuple[str, ...]
    interaction: str

    def describe(self, query: str) -> str:
        return self.description_template.format(query=query)


THEME_CATALOG = MappingProxyType(
    {
        "forest": ThemeBundle(
            key="forest",
            name="Quantum Forest",
            description_template=(
                'As you speak "{query}", crystalline trees emerge from the digital soil, their branches '
                "forming fractal patterns that echo through infinite dimensions."
            ),
            elements=("Bioluminescent data streams", "Singing silicon leaves", "Gravity-defying root networks"),
            interaction="Touch a tree and watch as your thoughts become patterns in its bark",
        ),
        "ocean": ThemeBundle(
            key="ocean",
            name="Neural Ocean",
            description_template=(
                "Your query transforms into tidal waves of consciousness across a sea of pure potential. "
                "Each ripple carries forgotten memories and unborn ideas."
            ),
            elements=("Schools of data-fish", "Coral networks of knowledge", "Currents of curiosity"),
            interaction="Dive beneath the surface to discover sunken libraries of ancient wisdom",
        ),
        "city": ThemeBundle(
            key="city",
            name="Fractal City",
            description_template=(
                "Skyscrapers of probability rise around you, each window showing alternate realities "
                "where different choices were made."
            ),
            elements=("Bridges of possibility", "Parks of pure mathematics", "Marketplaces of emotion"),
            interaction="Choose a building to explore - each contains a universe of stories",
        ),
        "space": ThemeBundle(
            key="space",
            name="Star Network",
            description_template=(
                "Your words ignite novas in a digital cosmos, creating constellations that map the "
                "connections between all things."
            ),
            elements=("Nebulas of inspiration", "Black holes of curiosity", "Comets of insight"),
            interaction="Connect two stars with your intention and watch new knowledge form",
        ),
        "mind": ThemeBundle(
            key="mind",
            name="Consciousness Garden",
            description_template=(
                "Thoughts bloom around you like exotic flowers, their petals revealing layers of meaning "
                "with each unfolding moment."
            ),
            elements=("Vines of memory", "Fountains of creativity", "Paths of logic"),
            interaction="Plant a seed of an idea and watch it grow into a complete concept",
        ),
    }
)

# Checked in this order for every token; space has no triggers and is only reached as the default.
THEME_TRIGGERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("forest", ("forest", "tree", "nature")),
    ("ocean", ("ocean", "sea", "water")),
    ("city", ("city", "building", "urban")),
    ("space", ()),
    ("mind", ("mind", "thought", "think")),
)
