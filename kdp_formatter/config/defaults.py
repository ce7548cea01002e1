from typing import Dict

from kdp_formatter.config.sizes import DEFAULT_TRIM_KEY, get_trim_size
from kdp_formatter.models.book import FontFamily, KDPSettings, PaperColor

# Plain 6x9 white-paper profile used by the full editor
STANDARD = KDPSettings(
    trim_size=get_trim_size(DEFAULT_TRIM_KEY),
    bleed=False,
    paper_color=PaperColor.WHITE,
    font_size=11,
    line_height=1.5,
    font_family=FontFamily.SERIF,
)

# Publish-ready profile for the instant flow: cream paper reads easier for fiction
INSTANT = KDPSettings(
    trim_size=get_trim_size(DEFAULT_TRIM_KEY),
    bleed=False,
    paper_color=PaperColor.CREAM,
    font_size=11,
    line_height=1.5,
    font_family=FontFamily.SERIF,
)

PROFILES: Dict[str, KDPSettings] = {
    "standard": STANDARD,
    "instant": INSTANT,
}


def default_settings(profile: str = "standard") -> KDPSettings:
    """Return a fresh copy of a named settings profile."""
    if profile not in PROFILES:
        raise ValueError(f"Unknown settings profile '{profile}'. Available: {list(PROFILES.keys())}")
    return PROFILES[profile].model_copy(deep=True)
