from __future__ import annotations

from dataclasses import dataclass, field

# Domestic and international cups that have no season selector.
DEFAULT_CUP_LEAGUE_IDS: frozenset[int] = frozenset(
    {
        525,  # FA Cup
        556,  # Copa del Rey
        529,  # DFB Pokal
        547,  # Coppa Italia
        528,  # Coupe de France
        1,  # World Cup
        4,  # Euro Championship
        5,  # Nations League
        9,  # Copa America
        15,  # FIFA Club World Cup
        17,  # AFC Asian Cup
        29,  # Africa Cup of Nations
        530,  # Copa Libertadores
        848,  # AFC Champions League
    }
)

# Competitions with a knockout bracket tab.
DEFAULT_BRACKET_LEAGUE_IDS: frozenset[int] = frozenset(
    {
        2,  # UEFA Champions League
        3,  # UEFA Europa League
        848,  # AFC Champions League
    }
)


@dataclass(frozen=True)
class CompetitionClassification:
    """Static lookup tables keyed by API-Football league id."""

    bracket_style: frozenset[int] = field(default=DEFAULT_BRACKET_LEAGUE_IDS)
    period_selection_unsupported: frozenset[int] = field(default=DEFAULT_CUP_LEAGUE_IDS)

    def is_bracket_style(self, entity_id: int) -> bool:
        return entity_id in self.bracket_style

    def supports_period_selection(self, entity_id: int) -> bool:
        return entity_id not in self.period_selection_unsupported
