from .auth import AuthOrchestrator, Credentials, FillResult, find_submit
from .field_kinds import FieldKind
from .field_resolver import Candidate, Strategy, resolve_field
from .form_ranker import FormCandidate, pick_best_root
from .human import HumanTypist
from .retry import with_retries
from .scoring import ElementSnapshot, ScoredCandidate, score_element, scored_fallback
from .search_root import SearchRoot, SemanticSearchRoot

__all__ = [
    "AuthOrchestrator",
    "Candidate",
    "Credentials",
    "ElementSnapshot",
    "FieldKind",
    "FillResult",
    "FormCandidate",
    "HumanTypist",
    "ScoredCandidate",
    "SearchRoot",
    "SemanticSearchRoot",
    "Strategy",
    "find_submit",
    "pick_best_root",
    "resolve_field",
    "score_element",
    "scored_fallback",
    "with_retries",
]
