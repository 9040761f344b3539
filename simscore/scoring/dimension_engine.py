# simscore/scoring/dimension_engine.py
"""
Dimension Scoring Engine
-------------------------
Converts raw action/interaction event lists into four sub-scores for each of
the five competency dimensions.

Every sub-score follows the same shape:
    score = base + Σ signal deltas        clamped to [0, 100]

Empty event lists never raise. They fall through to the documented neutral
defaults (70-90 depending on the sub-score), because early-session calls
routinely have no evidence yet.

A signal that is ``None`` was not observed and never triggers its rule.
"""
import structlog
from typing import Any, Dict, List, Sequence

from simscore.models.context import ResolutionData, ScenarioData
from simscore.models.enumerations import ScenarioComplexity
from simscore.models.events import ActionEvent, InteractionEvent
from simscore.models.scores import (
    CommunicationScores,
    CustomerServiceScores,
    ProblemSolvingScores,
    ProceduralScores,
    TechnicalScores,
)
from simscore.scoring.utils import clamp, mean, mean_or_default, population_variance

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Action vocabularies
# ---------------------------------------------------------------------------

NECESSARY_ACTIONS = {"research", "diagnosis", "solution", "verification", "communication"}
PROCESS_ORDER = ["initial_assessment", "diagnosis", "solution", "verification"]
SYSTEMATIC_STEPS = ["initial_assessment", "research", "diagnosis", "hypothesis", "testing", "solution"]
LOGICAL_FLOW = ["initial_assessment", "research", "diagnosis", "solution", "verification"]

DEFAULT_RESEARCH_QUALITY = 70
EMPATHETIC_RESPONSE_DEFAULT = 85


def _of_type(actions: Sequence[ActionEvent], *types: str) -> List[ActionEvent]:
    return [a for a in actions if a.type in types]


def _at_least(value, threshold) -> bool:
    return value is not None and value >= threshold


def _below(value, threshold) -> bool:
    return value is not None and value < threshold


class DimensionScoringEngine:
    """Pure sub-score calculators, one public method per dimension."""

    # ------------------------------------------------------------------
    # Technical
    # ------------------------------------------------------------------

    def technical(
        self,
        actions: Sequence[ActionEvent],
        resolution: ResolutionData,
        scenario: ScenarioData,
    ) -> TechnicalScores:
        scores = TechnicalScores(
            accuracy=self._technical_accuracy(actions, resolution, scenario),
            efficiency=self._technical_efficiency(actions, resolution, scenario),
            knowledge=self._knowledge_application(actions, scenario),
            innovation=self._innovation(actions, resolution),
        )
        logger.debug("technical_scored", action_count=len(actions), **scores.sub_scores())
        return scores

    def _technical_accuracy(self, actions, resolution, scenario) -> float:
        score = 85
        if resolution.resolved:
            score += 10
        if len(_of_type(actions, "diagnosis", "research")) >= 2:
            score += 5
        score -= 3 * sum(1 for a in actions if _below(a.quality, 60))
        if (
            scenario.complexity == ScenarioComplexity.ADVANCED
            and resolution.solution_complexity == ScenarioComplexity.ADVANCED
        ):
            score += 5
        return clamp(score)

    def _technical_efficiency(self, actions, resolution, scenario) -> float:
        score = 75
        actual = resolution.time_to_resolution or 30
        expected = scenario.estimated_time or 30
        ratio = actual / expected
        if ratio <= 0.8:
            score += 20
        elif ratio <= 1.0:
            score += 10
        elif ratio > 1.2:
            score -= 10

        score -= 2 * sum(1 for a in actions if a.type not in NECESSARY_ACTIONS)

        research = _of_type(actions, "research")
        if research:
            avg_quality = mean_or_default((a.quality for a in research), DEFAULT_RESEARCH_QUALITY)
            if avg_quality >= 85:
                score += 5
        return clamp(score)

    def _knowledge_application(self, actions, scenario) -> float:
        score = 70
        research = _of_type(actions, "research")
        if research:
            score += 15
            avg_quality = mean_or_default((a.quality for a in research), DEFAULT_RESEARCH_QUALITY)
            if avg_quality >= 85:
                score += 10

        score += 5 * sum(
            1 for a in _of_type(actions, "solution") if _at_least(a.appropriateness, 80)
        )

        if scenario.complexity == ScenarioComplexity.ADVANCED:
            score += 3 * sum(1 for a in actions if _at_least(a.expertise_level, 4))
        return clamp(score)

    def _innovation(self, actions, resolution) -> float:
        score = 60
        score += 10 * sum(1 for a in actions if _at_least(a.creativity, 70))
        score += 8 * len(_of_type(actions, "alternative_solution", "solution_variation"))
        if _at_least(resolution.communication_innovation, 70):
            score += 10
        if resolution.process_improvements:
            score += 15
        return clamp(score)

    # ------------------------------------------------------------------
    # Communication
    # ------------------------------------------------------------------

    def communication(
        self,
        interactions: Sequence[InteractionEvent],
        resolution: ResolutionData,
    ) -> CommunicationScores:
        scores = CommunicationScores(
            clarity=self._clarity(interactions),
            empathy=self._empathy(interactions),
            responsiveness=self._responsiveness(interactions),
            documentation=self._documentation_quality(resolution),
        )
        logger.debug(
            "communication_scored", interaction_count=len(interactions), **scores.sub_scores()
        )
        return scores

    def _clarity(self, interactions) -> float:
        values = [i.clarity for i in interactions if i.clarity is not None]
        if not values:
            return 75
        avg = mean(values)
        # consistent clarity earns a bonus
        if population_variance(values) < 100:
            return clamp(avg + 5)
        return clamp(avg)

    def _empathy(self, interactions) -> float:
        values = []
        for interaction in interactions:
            if interaction.empathy is not None:
                values.append(interaction.empathy)
            elif interaction.type == "empathetic_response":
                values.append(EMPATHETIC_RESPONSE_DEFAULT)
        if not values:
            return 75

        bonus = 3 * sum(
            1 for i in interactions
            if i.type == "emotional_support" or _at_least(i.emotional_intelligence, 80)
        )
        return clamp(mean(values) + bonus)

    def _responsiveness(self, interactions) -> float:
        if not interactions:
            return 75
        score = 85
        avg_response = mean([i.response_time for i in interactions if i.response_time is not None])
        if avg_response is not None:
            if avg_response <= 30:
                score += 15
            elif avg_response <= 60:
                score += 10
            elif avg_response <= 120:
                score += 5
            elif avg_response <= 300:
                score -= 5
            else:
                score -= 15

        score += 5 * sum(
            1 for i in interactions if i.type == "proactive_update" or i.proactive is True
        )
        return clamp(score)

    def _documentation_quality(self, resolution) -> float:
        score = 70
        doc = resolution.documentation
        if doc is not None:
            score += 20
            if _at_least(doc.completeness, 80):
                score += 5
            if _at_least(doc.clarity, 80):
                score += 5
        if resolution.steps:
            score += min(10, 2 * len(resolution.steps))
        return clamp(score)

    # ------------------------------------------------------------------
    # Procedural
    # ------------------------------------------------------------------

    def procedural(
        self,
        actions: Sequence[ActionEvent],
        scenario: ScenarioData,
        resolution: ResolutionData,
    ) -> ProceduralScores:
        scores = ProceduralScores(
            compliance=self._process_compliance(actions, scenario),
            security=self._security(actions, scenario),
            escalation=self._escalation(actions, resolution),
            documentation=self._procedural_documentation(resolution),
        )
        logger.debug("procedural_scored", action_count=len(actions), **scores.sub_scores())
        return scores

    def _process_compliance(self, actions, scenario) -> float:
        required = scenario.required_steps
        done = {a.type for a in actions}
        compliance = 80 - 10 * sum(1 for step in required if step not in done)

        ordered = [PROCESS_ORDER.index(a.type) for a in actions if a.type in PROCESS_ORDER]
        inversions = sum(1 for prev, cur in zip(ordered, ordered[1:]) if cur < prev)
        order_score = 100 - 5 * inversions

        return clamp((compliance + order_score) / 2)

    def _security(self, actions, scenario) -> float:
        score = 90
        score -= 15 * sum(
            1 for a in actions if a.security_risk is True or a.security_compliance is False
        )
        if scenario.requires_identity_verification and not _of_type(
            actions, "identity_verification", "security_check"
        ):
            score -= 20
        score += 5 * sum(
            1 for a in actions if a.type == "security_assessment" or a.proactive_security is True
        )
        return clamp(score)

    def _escalation(self, actions, resolution) -> float:
        score = 90
        escalations = _of_type(actions, "escalation")
        if not escalations:
            if resolution.should_have_escalated:
                score -= 25
            return clamp(score)

        for escalation in escalations:
            if escalation.appropriate is True:
                score += 5
            elif escalation.appropriate is False:
                score -= 15

            if _at_least(escalation.justification_quality, 80):
                score += 5
            elif _below(escalation.justification_quality, 60):
                score -= 5
        return clamp(score)

    def _procedural_documentation(self, resolution) -> float:
        score = 75
        doc = resolution.procedural_documentation
        if doc is not None:
            score += 15
            if _at_least(doc.steps_documented, 80):
                score += 5
            if _at_least(doc.reasoning_documented, 80):
                score += 5
        return clamp(score)

    # ------------------------------------------------------------------
    # Customer service
    # ------------------------------------------------------------------

    def customer_service(
        self,
        interactions: Sequence[InteractionEvent],
        resolution: ResolutionData,
    ) -> CustomerServiceScores:
        scores = CustomerServiceScores(
            satisfaction=self._satisfaction(interactions, resolution),
            relationship=self._relationship(interactions),
            professionalism=self._professionalism(interactions),
            follow_up=self._follow_up(resolution),
        )
        logger.debug(
            "customer_service_scored", interaction_count=len(interactions), **scores.sub_scores()
        )
        return scores

    def _satisfaction(self, interactions, resolution) -> float:
        if resolution.customer_satisfaction is not None:
            return clamp(resolution.customer_satisfaction)
        values = [i.satisfaction for i in interactions if i.satisfaction is not None]
        if not values:
            return 75
        return clamp(mean(values))

    def _relationship(self, interactions) -> float:
        if not interactions:
            return 75
        score = 70
        score += 8 * sum(
            1 for i in interactions if i.type == "rapport_building" or _at_least(i.rapport, 70)
        )
        score += 5 * sum(
            1 for i in interactions
            if i.personal_connection is True or i.type == "personal_acknowledgment"
        )
        score += 6 * sum(1 for i in interactions if _at_least(i.trust_building, 70))
        return clamp(score)

    def _professionalism(self, interactions) -> float:
        if not interactions:
            return 85
        score = 85
        score -= 10 * sum(
            1 for i in interactions if i.unprofessional is True or _below(i.professionalism, 60)
        )
        score += 3 * sum(
            1 for i in interactions
            if _at_least(i.professionalism, 95) or i.type == "exceptional_service"
        )
        language = mean([i.language_quality for i in interactions if i.language_quality is not None])
        if language is not None and language >= 90:
            score += 5
        return clamp(score)

    def _follow_up(self, resolution) -> float:
        score = 70
        if resolution.follow_up_provided:
            score += 20
            if _at_least(resolution.follow_up_quality, 80):
                score += 10
        elif resolution.follow_up_required:
            score -= 20
        else:
            # clean resolution, nothing to follow up
            score += 10
        return clamp(score)

    # ------------------------------------------------------------------
    # Problem solving
    # ------------------------------------------------------------------

    def problem_solving(
        self,
        actions: Sequence[ActionEvent],
        resolution: ResolutionData,
        scenario: ScenarioData,
    ) -> ProblemSolvingScores:
        scores = ProblemSolvingScores(
            approach=self._approach(actions),
            creativity=self._creativity(actions, resolution),
            thoroughness=self._thoroughness(actions, resolution),
            adaptability=self._adaptability(actions, resolution),
        )
        logger.debug("problem_solving_scored", action_count=len(actions), **scores.sub_scores())
        return scores

    def _approach(self, actions) -> float:
        score = 75
        types = {a.type for a in actions}
        score += 3 * sum(1 for step in SYSTEMATIC_STEPS if step in types)
        score += 10 * sum(
            1 for a in actions if a.type == "root_cause_analysis" or a.root_cause_analysis is True
        )
        if self._has_logical_progression(actions):
            score += 10
        return clamp(score)

    @staticmethod
    def _has_logical_progression(actions) -> bool:
        """True when flow steps appear strictly in order, without repeats."""
        last = -1
        for action in actions:
            if action.type not in LOGICAL_FLOW:
                continue
            index = LOGICAL_FLOW.index(action.type)
            if index <= last:
                return False
            last = index
        return True

    def _creativity(self, actions, resolution) -> float:
        score = 60
        score += 15 * sum(
            1 for a in actions if _at_least(a.creativity, 70) or a.type == "creative_solution"
        )
        score += 10 * sum(
            1 for a in actions if a.type == "alternative_approach" or a.alternative is True
        )
        if resolution.innovative:
            score += 20
        return clamp(score)

    def _thoroughness(self, actions, resolution) -> float:
        score = 70
        score += min(20, 4 * len(_of_type(actions, "research", "investigation", "testing")))
        if _at_least(resolution.completeness, 90):
            score += 15
        elif _at_least(resolution.completeness, 80):
            score += 10
        score += 5 * len(_of_type(actions, "verification", "testing"))
        return clamp(score)

    def _adaptability(self, actions, resolution) -> float:
        score = 75
        score += 10 * sum(
            1 for a in actions if a.type == "strategy_change" or a.strategy_change is True
        )
        score += 8 * sum(
            1 for a in actions if a.type == "adaptive_response" or a.adaptive_response is True
        )
        if _at_least(resolution.approach_flexibility, 80):
            score += 10
        return clamp(score)

    # ------------------------------------------------------------------
    # Methodology
    # ------------------------------------------------------------------

    def methodology(self) -> Dict[str, Any]:
        """Static description of each dimension, its components and scoring factors."""
        return DIMENSION_METHODOLOGY


DIMENSION_METHODOLOGY: Dict[str, Any] = {
    "technical": {
        "description": "Evaluates technical solution accuracy, efficiency, knowledge application, and innovation",
        "components": {
            "accuracy": "Correctness of technical solutions and troubleshooting approaches",
            "efficiency": "Time management and resource utilization during problem resolution",
            "knowledge": "Effective application of technical knowledge and research skills",
            "innovation": "Creative problem-solving and process improvement suggestions",
        },
        "scoring_factors": [
            "Solution correctness and completeness",
            "Time-to-resolution vs. scenario complexity",
            "Quality of knowledge base research",
            "Technical methodology adherence",
            "Innovation in problem-solving approach",
        ],
    },
    "communication": {
        "description": "Assesses communication clarity, empathy, responsiveness, and documentation quality",
        "components": {
            "clarity": "Clear, understandable communication with customers",
            "empathy": "Demonstration of customer empathy and understanding",
            "responsiveness": "Timely and appropriate responses to customer needs",
            "documentation": "Quality of written documentation and follow-up",
        },
        "scoring_factors": [
            "Communication clarity and professionalism",
            "Emotional intelligence and empathy demonstration",
            "Response time and proactive communication",
            "Documentation completeness and quality",
        ],
    },
    "procedural": {
        "description": "Evaluates adherence to procedures, security protocols, and escalation processes",
        "components": {
            "compliance": "Following established procedures and protocols",
            "security": "Adherence to security and privacy requirements",
            "escalation": "Appropriate escalation timing and justification",
            "documentation": "Proper procedural documentation and record-keeping",
        },
        "scoring_factors": [
            "Process step completion and order",
            "Security protocol adherence",
            "Escalation appropriateness and justification",
            "Procedural documentation quality",
        ],
    },
    "customer_service": {
        "description": "Measures customer satisfaction, relationship building, and service quality",
        "components": {
            "satisfaction": "Direct customer satisfaction ratings and feedback",
            "relationship": "Rapport building and customer relationship management",
            "professionalism": "Professional behavior and service delivery",
            "follow_up": "Quality of follow-up and closure processes",
        },
        "scoring_factors": [
            "Customer satisfaction ratings",
            "Rapport and relationship building effectiveness",
            "Professional behavior consistency",
            "Follow-up completeness and quality",
        ],
    },
    "problem_solving": {
        "description": "Assesses problem-solving methodology, creativity, and adaptability",
        "components": {
            "approach": "Systematic and logical problem-solving methodology",
            "creativity": "Creative and innovative solution development",
            "thoroughness": "Comprehensive problem investigation and resolution",
            "adaptability": "Flexibility and adaptation to changing requirements",
        },
        "scoring_factors": [
            "Systematic problem-solving approach",
            "Creative solution development",
            "Investigation thoroughness and completeness",
            "Adaptability to new information and requirements",
        ],
    },
}
