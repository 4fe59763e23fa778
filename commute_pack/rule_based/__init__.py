from .scoring import compute_efficiency_score, score_units
from .selector import fit_to_budget, select_packs

__all__ = ["compute_efficiency_score", "fit_to_budget", "score_units", "select_packs"]
