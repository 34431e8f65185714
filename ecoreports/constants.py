"""Shared constants: data paths, column names, colors, model specifications."""
import os
from dataclasses import dataclass

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
AMPHIBIAN_PATH = os.path.join(DATA_DIR, "sierra_amphibians.csv")
SEAWATER_PATH = os.path.join(DATA_DIR, "calcofi_seawater.csv")

# ---------------------------------------------------------------------------
# Amphibians
# ---------------------------------------------------------------------------
SPECIES_COL = "amphibian_species"
SITE_COL = "lake_id"
DATE_COL = "survey_date"
STAGE_COL = "amphibian_life_stage"
NUMBER_COL = "amphibian_number"
DATE_FORMAT = "%m/%d/%Y"

AMPHIBIAN_COLS = [SPECIES_COL, SITE_COL, DATE_COL, STAGE_COL]

DEFAULT_SPECIES = "RAMU"
SPECIES_NAMES = {
    "RAMU": "Mountain yellow-legged frog (Rana muscosa)",
    "BUCA": "Yosemite toad (Anaxyrus canorus)",
    "PSRE": "Pacific chorus frog (Pseudacris regilla)",
    "RACA": "California red-legged frog (Rana draytonii)",
}

LIFE_STAGES = ["Adult", "SubAdult", "Tadpole"]
RANKED_STAGES = ["Adult", "SubAdult"]

STAGE_COLORS = {
    "Adult": "#264653",
    "SubAdult": "#2A9D8F",
    "Tadpole": "#E9C46A",
}

TOP_N_SITES = 8

# ---------------------------------------------------------------------------
# Seawater
# ---------------------------------------------------------------------------
SEAWATER_RENAME = {
    "t_deg_c": "temp_c",
    "salinity": "salinity",
    "po4u_m": "phosphate",
    "depth_m": "depth_m",
    "o2sat": "o2sat",
}

SEAWATER_LABELS = {
    "temp_c": "Temperature (°C)",
    "salinity": "Salinity (practical salinity scale)",
    "phosphate": "Phosphate (µmol/L)",
    "depth_m": "Depth (m)",
    "o2sat": "Oxygen saturation (%)",
}

SEED = 42
N_FOLDS = 10


@dataclass(frozen=True)
class ModelSpec:
    """A named linear model: one response regressed on an ordered list of predictors."""

    name: str
    response: str
    predictors: tuple = ()

    @property
    def formula(self):
        return f"{self.response} ~ {' + '.join(self.predictors)}"

    @property
    def columns(self):
        return [self.response, *self.predictors]


MODEL_1 = ModelSpec("Model 1", "o2sat", ("temp_c", "salinity", "phosphate"))
MODEL_2 = ModelSpec("Model 2", "o2sat", ("temp_c", "salinity", "phosphate", "depth_m"))
MODEL_SPECS = [MODEL_1, MODEL_2]

MODEL_COLORS = {
    "Model 1": "#E63946",
    "Model 2": "#2A9D8F",
}
