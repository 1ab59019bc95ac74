"""Fixed sport, league and team pools for the fictional universe."""

from __future__ import annotations

SPORTS: list[tuple[str, str]] = [
    ("football", "Football"),
    ("basketball", "Basketball"),
    ("tennis", "Tennis"),
    ("esports", "Esports"),
]

SPORT_KEYS = [key for key, _ in SPORTS]

LEAGUES: dict[str, list[str]] = {
    "football": ["Aurelian League", "Northshore Cup", "Continental XI"],
    "basketball": ["Metro Series", "Atlantic Circuit", "Prime Arena"],
    "tennis": ["Silver Court", "Grand Indoor", "Coastal Open"],
    "esports": ["Neon Division", "Hyperlink League", "Circuit Masters"],
}

TEAMS: dict[str, list[str]] = {
    "football": ["Vale United", "Orion FC", "Sable Town", "Crestford", "Helios SC", "Ravenholm", "Nova Rangers", "Ironbridge"],
    "basketball": ["Cobalt Kings", "Harbor Sparks", "Violet Comets", "Axis Giants", "North Alloy", "Summit Rush", "City Forge", "Quartz Lions"],
    "tennis": ["M. Kova", "S. Rinaldi", "A. Voss", "T. Han", "J. Sato", "D. Mercer", "L. Neri", "P. Alvarez"],
    "esports": ["Team Prism", "Voidwalkers", "ArcNova", "Kinetic", "Night Circuit", "ByteRush", "Sable Syndicate", "GlitchGarden"],
}

# Event length in virtual minutes
DURATION_MIN: dict[str, int] = {
    "football": 40,
    "basketball": 28,
    "tennis": 22,
    "esports": 26,
}


def pretty_sport(key: str) -> str:
    for sport_key, name in SPORTS:
        if sport_key == key:
            return name
    return key
