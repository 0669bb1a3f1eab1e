# grocery_prices/config/settings.py

"""Central configuration for the grocery_prices report."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the grocery_prices report."""

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_PATH: Path = Path(
        os.getenv(
            "GROCERY_PRICES_DATA",
            str(BASE_DIR / "data" / "analysis_data" / "cleaned_data.csv"),
        )
    )
    OUTPUT_DIR: Path = BASE_DIR / "output"
    CHARTS_DIR: Path = OUTPUT_DIR / "charts"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Input columns ---
    REQUIRED_COLUMNS: list[str] = ["vendor", "current_price"]
    OPTIONAL_COLUMNS: list[str] = ["old_price", "units"]

    # --- Charts ---
    HISTOGRAM_BIN_WIDTH: float = 1.0           # Currency units per bin
    HISTOGRAM_RANGE: tuple[float, float] = (0.0, 50.0)   # Half-open
    SCATTER_RANGE: tuple[float, float] = (0.0, 100.0)    # Closed, both axes

    # --- Aggregation ---
    DEFAULT_TRANSFORM: str = "log1p"      # Second summary table

    # --- Vendors (Project Hammer retailers) ---
    KNOWN_VENDORS: list[str] = [
        "Voila",
        "T&T",
        "Loblaws",
        "No Frills",
        "Metro",
        "Galleria",
        "Walmart",
        "Save-On-Foods",
    ]
    VENDOR_COLORS: dict[str, str] = {
        "Voila": "#1f77b4",
        "T&T": "#ff7f0e",
        "Loblaws": "#d62728",
        "No Frills": "#bcbd22",
        "Metro": "#9467bd",
        "Galleria": "#8c564b",
        "Walmart": "#17becf",
        "Save-On-Foods": "#2ca02c",
    }
    FALLBACK_COLOR: str = "#7f7f7f"
