"""
LangGraph pipeline nodes - one per parsing stage.
Each node reads what earlier stages left on the state and returns the updated state.
"""

from .state import PipelineState
from ..tools.text_normalizer import TextNormalizer
from ..tools.entity_extractor import EntityExtractor
from ..tools.time_parser import TemporalResolver
from ..tools.confidence import ConfidenceScorer
from ..tools.guardrail import GuardrailDecision
from ..utils.logger import logger


class PipelineNodes:
    def __init__(
        self,
        normalizer: TextNormalizer,
        extractor: EntityExtractor,
        resolver: TemporalResolver,
        scorer: ConfidenceScorer,
        guardrail: GuardrailDecision
    ):
        self.normalizer = normalizer
        self.extractor = extractor
        self.resolver = resolver
        self.scorer = scorer
        self.guardrail = guardrail

    def normalize(self, state: PipelineState) -> PipelineState:
        state["clean_text"] = self.normalizer.normalize(state["raw_text"])
        logger.info(f"Normalized: '{state['clean_text']}'")
        return state

    def extract(self, state: PipelineState) -> PipelineState:
        entities = self.extractor.extract(state["clean_text"])
        state["entities"] = entities
        logger.info(
            f"Extracted: department={entities.department} ({entities.department_confidence:.2f}), "
            f"date_phrase={entities.date_phrase}, time_phrase={entities.time_phrase}"
        )
        return state

    def resolve(self, state: PipelineState) -> PipelineState:
        state["normalized"] = self.resolver.resolve(state["clean_text"], state["entities"])
        return state

    def score(self, state: PipelineState) -> PipelineState:
        state["entities_confidence"] = self.scorer.score_entities(state["entities"], state["raw_text"])
        state["normalization_confidence"] = self.scorer.score_normalization(state["normalized"], state["raw_text"])
        logger.info(
            f"Confidence: entities={state['entities_confidence']:.2f}, "
            f"normalization={state['normalization_confidence']:.2f}"
        )
        return state

    def decide(self, state: PipelineState) -> PipelineState:
        state["result"] = self.guardrail.decide(
            state["raw_text"],
            state["entities"],
            state["normalized"],
            state["entities_confidence"],
            state["normalization_confidence"]
        )
        return state
