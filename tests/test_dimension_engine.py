# tests/test_dimension_engine.py

"""
Dimension Scoring Engine Tests

Covers the neutral defaults for empty event lists and the signal rules of
each sub-score.
"""

import pytest

from simscore.models.context import (
    DocumentationRecord,
    ProceduralDocumentation,
    ResolutionData,
    ScenarioData,
)
from simscore.models.events import ActionEvent, InteractionEvent


def actions(*payloads):
    return [ActionEvent(**payload) for payload in payloads]


def interactions(*payloads):
    return [InteractionEvent(**payload) for payload in payloads]


UNRESOLVED = ResolutionData(resolved=False)
DEFAULT_SCENARIO = ScenarioData()


# ---------------------------------------------------------------------------
# Technical
# ---------------------------------------------------------------------------

class TestTechnical:

    def test_empty_defaults(self, engine):
        """No actions, unresolved, 30/30 minutes."""
        scores = engine.technical([], UNRESOLVED, DEFAULT_SCENARIO)
        assert scores.accuracy == 85
        assert scores.efficiency == 85
        assert scores.knowledge == 70
        assert scores.innovation == 60

    def test_accuracy_caps_at_100(self, engine):
        """Resolved advanced work with two diagnostic actions overflows and is clamped."""
        scores = engine.technical(
            actions({"type": "diagnosis", "quality": 80}, {"type": "research", "quality": 75}),
            ResolutionData(resolved=True, solution_complexity="advanced"),
            ScenarioData(complexity="advanced"),
        )
        assert scores.accuracy == 100

    def test_low_quality_actions_penalized(self, engine):
        scores = engine.technical(
            actions(*[{"type": "solution", "quality": 50}] * 3), UNRESOLVED, DEFAULT_SCENARIO
        )
        assert scores.accuracy == 76

    def test_unobserved_quality_is_not_low(self, engine):
        """A missing quality signal never triggers the low-quality penalty."""
        scores = engine.technical(actions({"type": "solution"}), UNRESOLVED, DEFAULT_SCENARIO)
        assert scores.accuracy == 85

    @pytest.mark.parametrize("minutes,expected", [
        (20, 95),   # ratio 0.67
        (30, 85),   # ratio 1.0
        (33, 75),   # ratio 1.1, no adjustment
        (40, 65),   # ratio 1.33
    ])
    def test_efficiency_time_ratio(self, engine, minutes, expected):
        scores = engine.technical(
            [],
            ResolutionData(resolved=True, time_to_resolution=minutes),
            ScenarioData(estimated_time=30),
        )
        assert scores.efficiency == expected

    def test_efficiency_unnecessary_actions_and_research_bonus(self, engine):
        scores = engine.technical(
            actions(
                {"type": "coffee_break"},
                {"type": "small_talk"},
                {"type": "research", "quality": 90},
            ),
            ResolutionData(resolved=True, time_to_resolution=20),
            ScenarioData(estimated_time=30),
        )
        assert scores.efficiency == 75 + 20 - 4 + 5

    def test_knowledge_research_and_solutions(self, engine):
        scores = engine.technical(
            actions(
                {"type": "research", "quality": 90},
                {"type": "solution", "appropriateness": 85},
                {"type": "solution", "appropriateness": 85},
            ),
            UNRESOLVED,
            DEFAULT_SCENARIO,
        )
        assert scores.knowledge == 100

    def test_knowledge_unrated_research_uses_default_quality(self, engine):
        scores = engine.technical(actions({"type": "research"}), UNRESOLVED, DEFAULT_SCENARIO)
        assert scores.knowledge == 85

    def test_expertise_counts_only_for_advanced_scenarios(self, engine):
        expert = actions({"type": "diagnosis", "expertise_level": 5})
        basic = engine.technical(expert, UNRESOLVED, ScenarioData(complexity="basic"))
        advanced = engine.technical(expert, UNRESOLVED, ScenarioData(complexity="advanced"))
        assert basic.knowledge == 70
        assert advanced.knowledge == 73

    def test_innovation_signals(self, engine):
        scores = engine.technical(
            actions({"type": "alternative_solution", "creativity": 80}),
            ResolutionData(resolved=True, process_improvements=["automate password reset"]),
            DEFAULT_SCENARIO,
        )
        assert scores.innovation == 60 + 10 + 8 + 15

    def test_innovation_is_clamped(self, engine):
        scores = engine.technical(
            actions({"type": "alternative_solution", "creativity": 80}),
            ResolutionData(
                resolved=True,
                communication_innovation=75,
                process_improvements=["automate password reset"],
            ),
            DEFAULT_SCENARIO,
        )
        assert scores.innovation == 100


# ---------------------------------------------------------------------------
# Communication
# ---------------------------------------------------------------------------

class TestCommunication:

    def test_empty_defaults(self, engine):
        scores = engine.communication([], UNRESOLVED)
        assert scores.clarity == 75
        assert scores.empathy == 75
        assert scores.responsiveness == 75
        assert scores.documentation == 70

    def test_consistent_clarity_bonus(self, engine):
        """Variance below 100 earns +5 on top of the mean."""
        scores = engine.communication(
            interactions({"type": "response", "clarity": 80}, {"type": "response", "clarity": 84}),
            UNRESOLVED,
        )
        assert scores.clarity == 87

    def test_inconsistent_clarity_no_bonus(self, engine):
        scores = engine.communication(
            interactions({"type": "response", "clarity": 50}, {"type": "response", "clarity": 90}),
            UNRESOLVED,
        )
        assert scores.clarity == 70

    def test_empathy_default_for_empathetic_response_and_support_bonus(self, engine):
        scores = engine.communication(
            interactions(
                {"type": "response", "empathy": 80},
                {"type": "empathetic_response"},
                {"type": "emotional_support"},
            ),
            UNRESOLVED,
        )
        assert scores.empathy == pytest.approx(85.5)

    @pytest.mark.parametrize("times,expected", [
        ([20, 40], 100),
        ([90], 90),
        ([200], 80),
        ([400], 70),
    ])
    def test_responsiveness_by_average_response_time(self, engine, times, expected):
        scores = engine.communication(
            interactions(*[{"type": "response", "response_time": t} for t in times]),
            UNRESOLVED,
        )
        assert scores.responsiveness == expected

    def test_proactive_updates_add_to_responsiveness(self, engine):
        scores = engine.communication(
            interactions({"type": "proactive_update"}, {"type": "response", "proactive": True}),
            UNRESOLVED,
        )
        assert scores.responsiveness == 95

    def test_documentation_quality(self, engine):
        resolution = ResolutionData(
            resolved=True,
            documentation=DocumentationRecord(completeness=90, clarity=70),
            steps=["reset", "verify"],
        )
        assert engine.communication([], resolution).documentation == 70 + 20 + 5 + 4


# ---------------------------------------------------------------------------
# Procedural
# ---------------------------------------------------------------------------

class TestProcedural:

    def test_empty_defaults(self, engine):
        """All four default required steps are missing."""
        scores = engine.procedural([], DEFAULT_SCENARIO, UNRESOLVED)
        assert scores.compliance == 70
        assert scores.security == 90
        assert scores.escalation == 90
        assert scores.documentation == 75

    def test_full_process_in_order(self, engine):
        done = actions(
            {"type": "initial_assessment"},
            {"type": "diagnosis"},
            {"type": "solution"},
            {"type": "verification"},
        )
        assert engine.procedural(done, DEFAULT_SCENARIO, UNRESOLVED).compliance == 90

    def test_out_of_order_steps(self, engine):
        done = actions(
            {"type": "diagnosis"},
            {"type": "initial_assessment"},
            {"type": "solution"},
            {"type": "verification"},
        )
        assert engine.procedural(done, DEFAULT_SCENARIO, UNRESOLVED).compliance == 87.5

    def test_empty_required_steps_means_nothing_required(self, engine):
        scenario = ScenarioData(required_steps=[])
        assert engine.procedural([], scenario, UNRESOLVED).compliance == 90

    def test_security_penalties_and_bonus(self, engine):
        scenario = ScenarioData(requires_identity_verification=True)
        done = actions({"type": "password_reset", "security_risk": True}, {"type": "security_assessment"})
        assert engine.procedural(done, scenario, UNRESOLVED).security == 90 - 15 - 20 + 5

    def test_identity_verification_satisfied(self, engine):
        scenario = ScenarioData(requires_identity_verification=True)
        done = actions({"type": "identity_verification"})
        assert engine.procedural(done, scenario, UNRESOLVED).security == 90

    def test_missed_escalation(self, engine):
        resolution = ResolutionData(resolved=False, should_have_escalated=True)
        assert engine.procedural([], DEFAULT_SCENARIO, resolution).escalation == 65

    @pytest.mark.parametrize("appropriate,justification,expected", [
        (True, 85, 100),
        (False, 50, 70),
        (None, None, 90),
    ])
    def test_escalation_quality(self, engine, appropriate, justification, expected):
        done = actions({
            "type": "escalation",
            "appropriate": appropriate,
            "justification_quality": justification,
        })
        assert engine.procedural(done, DEFAULT_SCENARIO, UNRESOLVED).escalation == expected

    def test_procedural_documentation(self, engine):
        resolution = ResolutionData(
            resolved=True,
            procedural_documentation=ProceduralDocumentation(steps_documented=85, reasoning_documented=70),
        )
        assert engine.procedural([], DEFAULT_SCENARIO, resolution).documentation == 95


# ---------------------------------------------------------------------------
# Customer service
# ---------------------------------------------------------------------------

class TestCustomerService:

    def test_empty_defaults(self, engine):
        scores = engine.customer_service([], UNRESOLVED)
        assert scores.satisfaction == 75
        assert scores.relationship == 75
        assert scores.professionalism == 85
        assert scores.follow_up == 80

    def test_resolution_satisfaction_wins_over_interactions(self, engine):
        scores = engine.customer_service(
            interactions({"type": "response", "satisfaction": 40}),
            ResolutionData(resolved=True, customer_satisfaction=88),
        )
        assert scores.satisfaction == 88

    def test_satisfaction_from_interactions(self, engine):
        scores = engine.customer_service(
            interactions({"type": "response", "satisfaction": 60}, {"type": "response", "satisfaction": 80}),
            UNRESOLVED,
        )
        assert scores.satisfaction == 70

    def test_relationship_signals(self, engine):
        scores = engine.customer_service(
            interactions({"type": "rapport_building", "trust_building": 80}),
            UNRESOLVED,
        )
        assert scores.relationship == 84

    def test_professionalism_signals(self, engine):
        scores = engine.customer_service(
            interactions(
                {"type": "response", "unprofessional": True, "language_quality": 95},
                {"type": "exceptional_service", "language_quality": 95},
            ),
            UNRESOLVED,
        )
        assert scores.professionalism == 85 - 10 + 3 + 5

    @pytest.mark.parametrize("resolution,expected", [
        (ResolutionData(resolved=True, follow_up_provided=True, follow_up_quality=85), 100),
        (ResolutionData(resolved=True, follow_up_provided=True), 90),
        (ResolutionData(resolved=True, follow_up_required=True), 50),
    ])
    def test_follow_up(self, engine, resolution, expected):
        assert engine.customer_service([], resolution).follow_up == expected


# ---------------------------------------------------------------------------
# Problem solving
# ---------------------------------------------------------------------------

class TestProblemSolving:

    def test_empty_defaults(self, engine):
        """An empty action list counts as a logical progression."""
        scores = engine.problem_solving([], UNRESOLVED, DEFAULT_SCENARIO)
        assert scores.approach == 85
        assert scores.creativity == 60
        assert scores.thoroughness == 70
        assert scores.adaptability == 75

    def test_systematic_ordered_approach(self, engine):
        done = actions(
            {"type": "initial_assessment"},
            {"type": "research"},
            {"type": "diagnosis"},
            {"type": "solution"},
            {"type": "verification"},
        )
        assert engine.problem_solving(done, UNRESOLVED, DEFAULT_SCENARIO).approach == 97

    def test_repeated_step_breaks_progression(self, engine):
        done = actions({"type": "research"}, {"type": "research"})
        assert engine.problem_solving(done, UNRESOLVED, DEFAULT_SCENARIO).approach == 78

    def test_root_cause_analysis_bonus(self, engine):
        done = actions({"type": "root_cause_analysis"})
        assert engine.problem_solving(done, UNRESOLVED, DEFAULT_SCENARIO).approach == 95

    def test_creativity(self, engine):
        done = actions({"type": "creative_solution"}, {"type": "solution", "alternative": True})
        resolution = ResolutionData(resolved=True, innovative=True)
        assert engine.problem_solving(done, resolution, DEFAULT_SCENARIO).creativity == 100

    def test_thoroughness_research_is_capped(self, engine):
        done = actions(*[{"type": "research"}] * 6)
        assert engine.problem_solving(done, UNRESOLVED, DEFAULT_SCENARIO).thoroughness == 90

    def test_thoroughness_completeness_and_verification(self, engine):
        done = actions({"type": "verification"})
        resolution = ResolutionData(resolved=True, completeness=85)
        assert engine.problem_solving(done, resolution, DEFAULT_SCENARIO).thoroughness == 85

    def test_adaptability(self, engine):
        done = actions({"type": "strategy_change"}, {"type": "diagnosis", "adaptive_response": True})
        resolution = ResolutionData(resolved=True, approach_flexibility=90)
        assert engine.problem_solving(done, resolution, DEFAULT_SCENARIO).adaptability == 100


class TestMethodology:

    def test_describes_every_dimension(self, engine):
        methodology = engine.methodology()
        assert set(methodology) == {
            "technical", "communication", "procedural", "customer_service", "problem_solving",
        }
        for entry in methodology.values():
            assert len(entry["components"]) == 4
            assert entry["scoring_factors"]
